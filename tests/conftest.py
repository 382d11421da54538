"""Shared pytest fixtures for xbview tests."""

from pathlib import Path

import pytest

from xbview.core.listing import Listing, parse_listing

SAMPLE_LISTING = """\
100 CALL CLEAR
110 FOR I=1 TO 10
120 GOSUB 500
130 NEXT I
140 CALL SHOW(I)
150 IF I>5 THEN 200 ELSE 999
160 CALL CHAR(128,"3C4281A5A599423C")
170 ON K GOTO 100,110,120
180 REM FOR FUN :: NOT CODE
200 END
500 RETURN
600 SUB SHOW(N)
610 PRINT "N=";N
620 SUBEND
"""


@pytest.fixture
def sample_text() -> str:
    """Return a small listing exercising loops, branches and subprograms."""
    return SAMPLE_LISTING


@pytest.fixture
def sample_listing(sample_text: str) -> Listing:
    """Return the parsed sample listing."""
    return parse_listing(sample_text)


@pytest.fixture
def listing_file(tmp_path: Path, sample_text: str) -> Path:
    """Write the sample listing to a temporary file."""
    path = tmp_path / "sample.xb"
    path.write_text(sample_text, encoding="utf-8")
    return path
