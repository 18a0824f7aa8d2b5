"""
Column name normalization utilities.
Single responsibility: clean header text and score header similarity.
"""

import re
import unicodedata
from typing import List, Optional


def clean_header(val: str) -> str:
    """
    Remove invisible characters and surrounding whitespace from a header.
    
    Args:
        val: Raw header text
        
    Returns:
        Cleaned header
    """
    val = re.sub(r"[\u200B-\u200D\u2060\ufeff]", "", str(val))
    return val.strip()


def normalize_column_name(col: str) -> str:
    """
    Normalize column name for comparison of header names.

    Accents are stripped, case is folded and every run of non-alphanumeric
    characters is dropped, so ``Post ID``, ``post_id`` and ``postId`` all
    normalize to ``postid``.
    
    Args:
        col: Column name
        
    Returns:
        Normalized column name
    """
    nfkd_form = unicodedata.normalize('NFKD', str(col))
    col = "".join(c for c in nfkd_form if not unicodedata.combining(c))
    return re.sub(r"[^0-9a-z]+", "", col.lower())


def name_similarity(left: str, right: str) -> float:
    """
    Score how likely two column names refer to the same field.
    
    Args:
        left: Column name from the reference file
        right: Column name from the extraction file
        
    Returns:
        Score between 0.0 and 1.0
    """
    left_norm = normalize_column_name(left)
    right_norm = normalize_column_name(right)
    
    if not left_norm or not right_norm:
        return 0.0
    
    if left == right:
        return 1.0
    if left_norm == right_norm:
        return 0.95
    
    # Prefixed exports such as twitterDetails_postId -> postId
    if right_norm.endswith(left_norm) or left_norm.endswith(right_norm):
        return 0.8
    if left_norm in right_norm or right_norm in left_norm:
        return 0.7
    
    return 0.0


def best_matching_column(name: str, candidates: List[str],
                         threshold: float = 0.5) -> Optional[str]:
    """
    Find the candidate column whose name best matches ``name``.

    Ties keep the earliest candidate.
    
    Args:
        name: Column to match
        candidates: Columns to choose from, in display order
        threshold: Minimum score for a candidate to be returned
        
    Returns:
        Best candidate, or None when nothing scores above the threshold
    """
    best_match = None
    best_score = 0.0
    
    for candidate in candidates:
        score = name_similarity(name, candidate)
        if score > best_score:
            best_score = score
            best_match = candidate
    
    if best_score < threshold:
        return None
    return best_match
