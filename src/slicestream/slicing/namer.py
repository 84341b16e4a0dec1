"""
Module: slicing.namer

Purpose:
    Expand output filename templates.

Tokens (case-insensitive, every occurrence replaced):
    <YYMMDD>  current date, e.g. 251204
    <NO>      1-based slice index, unpadded

    A template without <NO> gets "_NN" (index zero-padded to two
    digits) appended so names stay unique within a batch.

Key Functions:
    - expand_filename(): Template -> filename with extension
    - format_date_token(): Date -> YYMMDD

Dependencies:
    - re (std)
    - datetime (std)

Used By:
    - slicing.controller
"""

from __future__ import annotations

import re
from datetime import date
from typing import Optional

from slicestream.core.models import OutputFormat

DATE_TOKEN = re.compile(r"<YYMMDD>", re.IGNORECASE)
INDEX_TOKEN = re.compile(r"<NO>", re.IGNORECASE)


def format_date_token(day: date) -> str:
    """
    Two-digit year, month and day.

    Example:
        >>> format_date_token(date(2025, 12, 4))
        '251204'
    """
    return f"{day.year % 100:02d}{day.month:02d}{day.day:02d}"


def expand_base_name(template: str, index: int, today: Optional[date] = None) -> str:
    """Expand tokens in template without adding an extension."""
    today = today or date.today()
    base = DATE_TOKEN.sub(format_date_token(today), template)
    if INDEX_TOKEN.search(base):
        return INDEX_TOKEN.sub(str(index), base)
    return f"{base}_{index:02d}"


def expand_filename(
    template: str,
    index: int,
    fmt: OutputFormat,
    today: Optional[date] = None,
) -> str:
    """
    Build the output filename for one slice.

    Args:
        template: Prefix template, e.g. "img-<YYMMDD>-<NO>"
        index: 1-based slice index
        fmt: Output format (decides the extension)
        today: Date for <YYMMDD>; defaults to date.today()

    Returns:
        Filename such as "img-251204-3.jpg"

    Example:
        >>> expand_filename("slice", 1, OutputFormat.PNG)
        'slice_01.png'
    """
    return f"{expand_base_name(template, index, today)}.{fmt.extension}"
