"""
Unit tests for header normalization and cell conversion.
"""

import math
from datetime import date, datetime
from pathlib import Path
import sys

import pandas as pd

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from datamatch.utils.converters import cell_to_text
from datamatch.utils.normalizers import (
    best_matching_column,
    clean_header,
    name_similarity,
    normalize_column_name,
)


class TestCleanHeader:
    
    def test_strips_whitespace_and_invisible_characters(self):
        assert clean_header("\ufeffid ") == "id"
        assert clean_header("post\u200bId") == "postId"
    
    def test_plain_header_unchanged(self):
        assert clean_header("postContent") == "postContent"


class TestNameMatching:
    """Test cases for column name similarity."""
    
    def test_normalize(self):
        assert normalize_column_name("Post ID") == "postid"
        assert normalize_column_name("post_id") == "postid"
        assert normalize_column_name("Café") == "cafe"
    
    def test_similarity_ordering(self):
        assert name_similarity("id", "id") == 1.0
        assert name_similarity("post_id", "Post ID") == 0.95
        assert name_similarity("postId", "twitterDetails_postId") == 0.8
        assert name_similarity("content", "contentMainId") == 0.7
        assert name_similarity("postDate", "showcaseLink") == 0.0
    
    def test_best_match_prefers_higher_score(self):
        candidates = ["contentMainId", "id"]
        assert best_matching_column("id", candidates) == "id"
    
    def test_best_match_keeps_earliest_on_tie(self):
        candidates = ["a_postId", "b_postId"]
        assert best_matching_column("postId", candidates) == "a_postId"
    
    def test_no_match_below_threshold(self):
        assert best_matching_column("postDate", ["showcaseLink"]) is None


class TestCellToText:
    """Test cases for spreadsheet cell conversion."""
    
    def test_blank_values(self):
        assert cell_to_text(None) == ""
        assert cell_to_text(math.nan) == ""
        assert cell_to_text(pd.NaT) == ""
    
    def test_numbers(self):
        assert cell_to_text(101.0) == "101"
        assert cell_to_text(1.5) == "1.5"
        assert cell_to_text(7) == "7"
    
    def test_booleans(self):
        assert cell_to_text(True) == "TRUE"
        assert cell_to_text(False) == "FALSE"
    
    def test_dates(self):
        assert cell_to_text(datetime(2024, 1, 2)) == "2024-01-02"
        assert cell_to_text(datetime(2024, 1, 2, 9, 30)) == "2024-01-02 09:30:00"
        assert cell_to_text(date(2024, 1, 2)) == "2024-01-02"
        assert cell_to_text(pd.Timestamp("2024-01-02")) == "2024-01-02"
    
    def test_text_unchanged(self):
        assert cell_to_text(" padded ") == " padded "
