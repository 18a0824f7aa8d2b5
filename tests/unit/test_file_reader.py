"""
Unit tests for TabularFileReader.
"""

import pytest
from datetime import datetime
from pathlib import Path
import sys

import pandas as pd
from openpyxl import Workbook

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from datamatch.adapters.file_reader import (
    FormatError,
    TabularFileReader,
    discover_data_files,
)


DATA_DIR = Path(__file__).parent.parent / "data"


class TestReadCsv:
    """Test cases for delimited text input."""
    
    def setup_method(self):
        """Set up test fixtures."""
        self.reader = TabularFileReader()
    
    def test_reads_reference_fixture(self):
        table = self.reader.read(DATA_DIR / "fileA.csv")
        
        assert table.headers == ['id', 'postId', 'postContent', 'postDate']
        assert len(table.rows) == 5
        assert table.rows[0] == {
            'id': '1',
            'postId': '101',
            'postContent': 'Hello World',
            'postDate': '2024-01-01'
        }
        assert table.rows[1]['postContent'] == 'Second post, with comma'
    
    def test_reads_extraction_fixture(self):
        table = self.reader.read(DATA_DIR / "fileB.csv")
        
        assert table.headers[0] == 'twitterDetails_postId'
        assert table.column_count == 6
        assert len(table.rows) == 8
    
    def test_values_stay_text(self, tmp_path):
        path = tmp_path / "numbers.csv"
        path.write_text("code,amount\n007,1.50\nNA,\n", encoding="utf-8")
        
        table = self.reader.read(path)
        
        assert table.rows == [
            {'code': '007', 'amount': '1.50'},
            {'code': 'NA', 'amount': ''},
        ]
    
    def test_short_rows_are_padded(self, tmp_path):
        path = tmp_path / "short.csv"
        path.write_text("a,b,c\n1\n1,2\n", encoding="utf-8")
        
        table = self.reader.read(path)
        
        assert table.rows == [
            {'a': '1', 'b': '', 'c': ''},
            {'a': '1', 'b': '2', 'c': ''},
        ]
    
    def test_cells_beyond_header_are_dropped(self, tmp_path):
        path = tmp_path / "long.csv"
        path.write_text("id,name\n1,x\n2,y,extra\n3,z\n", encoding="utf-8")

        table = self.reader.read(path)

        assert table.headers == ['id', 'name']
        assert table.rows == [
            {'id': '1', 'name': 'x'},
            {'id': '2', 'name': 'y'},
            {'id': '3', 'name': 'z'},
        ]

    def test_trailing_comma_on_first_data_row(self, tmp_path):
        path = tmp_path / "trailing.csv"
        path.write_text("id,name\n1,x,\n2,y\n", encoding="utf-8")

        table = self.reader.read(path)

        assert table.headers == ['id', 'name']
        assert table.rows == [
            {'id': '1', 'name': 'x'},
            {'id': '2', 'name': 'y'},
        ]

    def test_empty_values(self, tmp_path):
        path = tmp_path / "empty-values.csv"
        path.write_text("header1,header2\nvalue1,\n,value3", encoding="utf-8")
        
        table = self.reader.read(path)
        
        assert table.rows[0] == {'header1': 'value1', 'header2': ''}
        assert table.rows[1] == {'header1': '', 'header2': 'value3'}
    
    def test_header_only_file(self, tmp_path):
        path = tmp_path / "headers-only.csv"
        path.write_text("col1,col2,col3\n", encoding="utf-8")
        
        table = self.reader.read(path)
        
        assert table.headers == ['col1', 'col2', 'col3']
        assert table.rows == []
    
    def test_empty_file_raises_format_error(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        
        with pytest.raises(FormatError, match="empty"):
            self.reader.read(path)
    
    def test_byte_order_mark_is_not_part_of_first_header(self, tmp_path):
        path = tmp_path / "bom.csv"
        path.write_bytes(b"\xef\xbb\xbfid,name\n1,x\n")
        
        table = self.reader.read(path)
        
        assert table.headers == ['id', 'name']
    
    def test_cp1252_fallback(self, tmp_path):
        path = tmp_path / "legacy.csv"
        path.write_bytes("name\nCaf\xe9\n".encode("latin-1"))
        
        table = self.reader.read(path)
        
        assert table.rows[0]['name'] == 'Café'
    
    def test_unicode_content(self, tmp_path):
        path = tmp_path / "unicode.csv"
        path.write_text("id,content\n1,Hello 世界 Café\n", encoding="utf-8")
        
        table = self.reader.read(path)
        
        assert table.rows[0]['content'] == 'Hello 世界 Café'
    
    def test_extension_is_case_insensitive(self, tmp_path):
        path = tmp_path / "UPPER.CSV"
        path.write_text("a\n1\n", encoding="utf-8")
        
        assert self.reader.read(path).rows == [{'a': '1'}]


class TestReadExcel:
    """Test cases for spreadsheet input."""
    
    def setup_method(self):
        """Set up test fixtures."""
        self.reader = TabularFileReader()
    
    def test_reads_first_sheet_as_text(self, tmp_path):
        path = tmp_path / "posts.xlsx"
        with pd.ExcelWriter(path) as writer:
            pd.DataFrame({
                'postId': [101, 102],
                'score': [1.5, None],
                'posted': [datetime(2024, 1, 1), datetime(2024, 1, 2, 9, 30)],
            }).to_excel(writer, sheet_name="First", index=False)
            pd.DataFrame({'other': ['ignored']}).to_excel(writer, sheet_name="Second", index=False)
        
        table = self.reader.read(path)
        
        assert table.headers == ['postId', 'score', 'posted']
        assert table.rows == [
            {'postId': '101', 'score': '1.5', 'posted': '2024-01-01'},
            {'postId': '102', 'score': '', 'posted': '2024-01-02 09:30:00'},
        ]
    
    def test_short_rows_are_padded(self, tmp_path):
        path = tmp_path / "ragged.xlsx"
        wb = Workbook()
        ws = wb.active
        ws.append(['a', 'b', 'c'])
        ws.append(['x'])
        wb.save(path)
        
        table = self.reader.read(path)
        
        assert table.rows == [{'a': 'x', 'b': '', 'c': ''}]
    
    def test_empty_sheet_raises_format_error(self, tmp_path):
        path = tmp_path / "empty.xlsx"
        Workbook().save(path)
        
        with pytest.raises(FormatError, match="file is empty"):
            self.reader.read(path)
    
    def test_blank_header_cells_get_a_name(self, tmp_path):
        path = tmp_path / "blank-header.xlsx"
        wb = Workbook()
        ws = wb.active
        ws.append(['id', None, 'name'])
        ws.append([1, 'x', 'y'])
        wb.save(path)
        
        table = self.reader.read(path)
        
        assert table.headers == ['id', 'Unnamed: 1', 'name']
        assert table.rows[0] == {'id': '1', 'Unnamed: 1': 'x', 'name': 'y'}


class TestReadErrors:
    
    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{}", encoding="utf-8")
        
        with pytest.raises(FormatError, match="Unsupported file format"):
            TabularFileReader().read(path)
    
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TabularFileReader().read(tmp_path / "missing.csv")
    
    def test_corrupt_workbook(self, tmp_path):
        path = tmp_path / "broken.xlsx"
        path.write_bytes(b"not a workbook")
        
        with pytest.raises(FormatError):
            TabularFileReader().read(path)


class TestDiscoverDataFiles:
    
    def test_lists_supported_files_sorted_and_excludes_choice(self, tmp_path):
        for name in ["b.xlsx", "a.csv", "c.xls", "notes.txt"]:
            (tmp_path / name).write_text("x", encoding="utf-8")
        (tmp_path / "folder.csv").mkdir()
        
        files = discover_data_files(tmp_path)
        assert [f.name for f in files] == ["a.csv", "b.xlsx", "c.xls"]
        
        files = discover_data_files(tmp_path, exclude=tmp_path / "a.csv")
        assert [f.name for f in files] == ["b.xlsx", "c.xls"]
    
    def test_missing_directory(self, tmp_path):
        assert discover_data_files(tmp_path / "nope") == []
