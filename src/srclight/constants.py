#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the srclight library.

This module centralizes hardcoded values and default configuration constants
used across srclight. Constants are organized by category:

1. Type Definitions - Literal types and type aliases
2. Security - safe mode levels and the highlighter gate threshold
3. Document Attributes - attribute names and defaults
4. Callouts and Placeholders - annotation syntax
5. Highlighter-Specific Constants - CDN locations, CSS selectors
6. Dependencies - package requirements per highlighter
"""

from __future__ import annotations

from enum import IntEnum
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

CssMode = Literal["class", "style", "inline"]
LinenumsMode = Literal["table", "inline"]
DocinfoLocation = Literal["head", "footer"]
Backend = Literal["html5", "docbook5"]

CSS_MODES: tuple[str, ...] = ("class", "style", "inline")
LINENUMS_MODES: tuple[str, ...] = ("table", "inline")
DOCINFO_LOCATIONS: tuple[str, ...] = ("head", "footer")
BACKENDS: tuple[str, ...] = ("html5", "docbook5")

# =============================================================================
# Security
# =============================================================================


class SafeMode(IntEnum):
    """Security levels for a conversion, from least to most restrictive."""

    UNSAFE = 0
    SAFE = 1
    SERVER = 10
    SECURE = 20


# At or above this level a document may not choose its own highlighter
DEFAULT_SECURITY_THRESHOLD = SafeMode.SERVER
DEFAULT_SAFE_MODE = SafeMode.SAFE

# =============================================================================
# Document Attributes
# =============================================================================

ATTR_SOURCE_HIGHLIGHTER = "source-highlighter"
ATTR_SOURCE_LANGUAGE = "source-language"
ATTR_SOURCE_LINENUMS_OPTION = "source-linenums-option"
ATTR_LINKCSS = "linkcss"
ATTR_STYLESDIR = "stylesdir"
ATTR_PREWRAP = "prewrap"
ATTR_ICONS = "icons"
ATTR_ICONSDIR = "iconsdir"
ATTR_ICONTYPE = "icontype"
ATTR_CDN_BASE_URL = "cdn-base-url"

# Per-highlighter attributes, formatted with the highlighter name
ATTR_HIGHLIGHTER_STYLE = "{name}-style"
ATTR_HIGHLIGHTER_CSS = "{name}-css"
ATTR_HIGHLIGHTER_LINENUMS_MODE = "{name}-linenums-mode"

# Block attributes and options
BLOCK_ATTR_LANGUAGE = "language"
BLOCK_ATTR_LINENUMS = "linenums"
BLOCK_ATTR_START = "start"
BLOCK_ATTR_HIGHLIGHT = "highlight"
BLOCK_ATTR_LINE_COMMENT = "line-comment"
BLOCK_OPTION_LINENUMS = "linenums"
BLOCK_OPTION_NOWRAP = "nowrap"
BLOCK_OPTION_MIXED = "mixed"

DEFAULT_CSS_MODE: CssMode = "class"
DEFAULT_LINENUMS_MODE: LinenumsMode = "table"
DEFAULT_START_LINE_NUMBER = 1
DEFAULT_STYLESDIR = "."
DEFAULT_ICONSDIR = "./images/icons"
DEFAULT_ICONTYPE = "png"
DEFAULT_CDN_BASE_URL = "https://cdnjs.cloudflare.com/ajax/libs"
DEFAULT_BACKEND: Backend = "html5"

# =============================================================================
# Callouts and Placeholders
# =============================================================================

# Line comment prefixes recognised in front of a callout when the block sets no line-comment
DEFAULT_CALLOUT_GUARDS: tuple[str, ...] = ("//", "#", "--", ";;")

# Placeholder delimiters written by the inline substitution pass
PASS_START = "\u0096"
PASS_END = "\u0097"

SENTINEL_PREFIX = "SRCLT"
SENTINEL_TERMINATOR = "Z"
SENTINEL_KIND_CALLOUT = "C"
SENTINEL_KIND_PLACEHOLDER = "P"
# Sentinels are upper-case letters only; the index digits stop short of the terminator
SENTINEL_NONCE_LENGTH = 8
SENTINEL_INDEX_DIGITS = "ABCDEFGHIJKLMNOPQRSTUVWXY"

CALLOUT_HTML_TEMPLATE = '<b class="conum">({number})</b>'
CALLOUT_FONT_TEMPLATE = '<i class="conum" data-value="{number}"></i><b>({number})</b>'
CALLOUT_IMAGE_TEMPLATE = '<img src="{src}" alt="{number}">'
CALLOUT_DOCBOOK_TEMPLATE = '<co xml:id="{id}"/>'

# =============================================================================
# Highlighter-Specific Constants
# =============================================================================

PYGMENTS_DEFAULT_STYLE = "default"
PYGMENTS_BASE_SELECTOR = "pre.pygments"
PYGMENTS_TOKEN_CLASS_PREFIX = "tok-"

HIGHLIGHT_JS_VERSION = "9.18.3"
HIGHLIGHT_JS_DEFAULT_THEME = "github"
PRETTIFY_VERSION = "r298"
PRETTIFY_DEFAULT_THEME = "prettify"

# =============================================================================
# Dependencies
# =============================================================================

DEPS_PYGMENTS = [("pygments", "pygments", ">=2.12")]

# =============================================================================
# CLI exit codes
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_RENDERING_ERROR = 7
