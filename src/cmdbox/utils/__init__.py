"""Shared helpers: downloads, tables, text, logging and retry."""

from cmdbox.utils.download import download, fetch_text, unzip
from cmdbox.utils.files import BrokenNodeModule, scan_broken_node_modules
from cmdbox.utils.table import build_table, print_table
from cmdbox.utils.text import clean_version, try_unescape

__all__ = [
    "download",
    "fetch_text",
    "unzip",
    "BrokenNodeModule",
    "scan_broken_node_modules",
    "build_table",
    "print_table",
    "clean_version",
    "try_unescape",
]
