"""
Document loader: turns raw CBOM text into a typed document.
"""

import json
import logging
from pathlib import Path
from typing import Union, Optional

from ..models import CBOMDocument
from ..error_handling import ParseError, DocumentLoadError

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> None:
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"invalid constant {name}")


def load(raw_text: Union[str, bytes], source: Optional[str] = None) -> CBOMDocument:
    """
    Parse a CBOM document.

    Only JSON syntax is checked here. Missing or oddly shaped fields are
    left for the model constructors, which treat them as absent.

    Args:
        raw_text: Document text, or UTF-8 bytes (a leading BOM is accepted)
        source: Optional name of the document for error messages

    Returns:
        Parsed CBOMDocument

    Raises:
        ParseError: If the input is not valid JSON
    """
    if isinstance(raw_text, (bytes, bytearray)):
        try:
            raw_text = bytes(raw_text).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError("CBOM document is not valid UTF-8", source=source, cause=e)

    if raw_text.startswith("\ufeff"):
        raw_text = raw_text[1:]

    try:
        data = json.loads(raw_text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ParseError(
            f"CBOM document is not valid JSON: {e.msg}",
            line=e.lineno,
            column=e.colno,
            source=source,
            cause=e
        )
    except ValueError as e:
        raise ParseError(f"CBOM document is not valid JSON: {e}", source=source, cause=e)
    except RecursionError as e:
        raise ParseError("CBOM document is nested too deeply", source=source, cause=e)

    document = CBOMDocument.from_dict(data)
    logger.info(
        f"Loaded CBOM{f' {source}' if source else ''}: {len(document.entries)} components, "
        f"{len(document.edges)} dependency records"
    )
    return document


def load_file(path: Union[str, Path]) -> CBOMDocument:
    """
    Read and parse a CBOM file.

    Args:
        path: Path to the CBOM JSON file

    Returns:
        Parsed CBOMDocument

    Raises:
        DocumentLoadError: If the file cannot be read
        ParseError: If the contents are not valid JSON
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise DocumentLoadError(f"Cannot read CBOM file {path}", file_path=str(path), cause=e)

    return load(raw, source=str(path))
