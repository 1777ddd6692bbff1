# File: confload/naming.py
# Purpose: Instance naming scheme shared by launch, discovery and cleanup
#
# Copies are named <base><ordinal><ext> with an unpadded ordinal, so every
# ordinal maps to exactly one file name and one process name.

import os
import re
from re import Pattern
from typing import Optional, Tuple


def split_template_name(template_name: str) -> Tuple[str, str]:
    """Split 'Zoom.exe' into ('Zoom', '.exe'); 'zoom' into ('zoom', '')"""
    base, ext = os.path.splitext(os.path.basename(template_name))
    if not base:
        raise ValueError(f"Invalid template name: {template_name!r}")
    return base, ext


def copy_name(template_name: str, ordinal: int) -> str:
    if ordinal < 1:
        raise ValueError(f"Ordinal must be >= 1, got {ordinal}")
    base, ext = split_template_name(template_name)
    return f"{base}{ordinal}{ext}"


def process_pattern(template_name: str) -> Pattern:
    """Matches the template process and every numbered copy"""
    base, ext = split_template_name(template_name)
    ext_part = f"(?:{re.escape(ext)})?" if ext else ""
    return re.compile(rf"^{re.escape(base)}(\d+)?{ext_part}$", re.IGNORECASE)


def copy_pattern(template_name: str) -> Pattern:
    """Matches numbered copies on disk, never the template itself"""
    base, ext = split_template_name(template_name)
    return re.compile(rf"^{re.escape(base)}(\d+){re.escape(ext)}$")


def ordinal_from_name(pattern: Pattern, name: str) -> Optional[int]:
    """Ordinal encoded in a matching name, None for the template or a mismatch"""
    match = pattern.match(name)
    if not match or match.group(1) is None:
        return None
    return int(match.group(1))
