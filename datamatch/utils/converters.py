"""
Cell value converters.
Single responsibility: turn raw spreadsheet cell values into text.
"""

import math
from datetime import date, datetime, time
from typing import Any

import pandas as pd


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return value is pd.NaT


def cell_to_text(value: Any) -> str:
    """
    Convert a spreadsheet cell to its string form.
    
    Args:
        value: Raw cell value as returned by the Excel engine
        
    Returns:
        Text value; blank cells become an empty string
    """
    if _is_blank(value):
        return ""
    
    if isinstance(value, str):
        return value
    
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    
    if isinstance(value, date):
        return value.isoformat()
    
    return str(value)
