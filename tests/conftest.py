"""
Shared fixtures: survey CSV builders.
"""

import csv
import io

import pytest

import config.settings as settings


IVIS_HEADERS = (
    [settings.COL_TIMESTAMP, settings.COL_ALIAS, settings.COL_HOBBY_RAW]
    + list(settings.RATING_COLUMNS.values())
    + [settings.COL_COLLABORATION, settings.COL_CODE_REPOSITORY]
)


def to_csv(rows):
    """Render rows as a fully quoted CSV document with LF line endings."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()


def ivis_row(timestamp="", alias="", hobby="", rating="7", **overrides):
    """
    One data row matching IVIS_HEADERS.

    overrides maps rating keys (e.g. programming="9") to cell values.
    """
    ratings = []
    for key in list(settings.RATING_COLUMNS) + list(settings.EXTRA_RATING_COLUMNS):
        ratings.append(overrides.get(key, rating))
    return [timestamp, alias, hobby] + ratings


@pytest.fixture
def ivis_csv(tmp_path):
    """Write an IVIS-style survey CSV and return its path."""
    def _write(data_rows, headers=None, name="survey.csv"):
        path = tmp_path / name
        path.write_text(to_csv([headers or IVIS_HEADERS] + data_rows), encoding="utf-8")
        return path
    return _write
