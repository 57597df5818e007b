"""
Testy walidatora dokumentu (validator/document_validator.py).

Run: python -m pytest tests/test_validator.py -q
"""

from validator import ErrorCode, validate_document


def _error_codes(report):
    return [p.code for p in report.errors]


def _warning_codes(report):
    return [p.code for p in report.warnings]


# ---------------------------------------------------------------------------
# Stage A — tytuł
# ---------------------------------------------------------------------------

class TestTitle:
    def test_valid_document(self, round_trip_text):
        report = validate_document(round_trip_text)
        assert report.is_valid
        assert report.errors == []

    def test_duplicate_title(self):
        report = validate_document("= One\n= Two\n== S\ntext here.")
        assert not report.is_valid
        assert _error_codes(report) == [ErrorCode.TITLE_DUPLICATE]
        assert report.errors[0].line == 2
        assert report.errors[0].details == {"lines": [1, 2]}

    def test_title_after_first_section(self):
        report = validate_document("== A\nalpha, x.\n= Doc\nlate text, here.\n== B\nbeta, y.")
        assert _error_codes(report) == [ErrorCode.TITLE_MISPLACED]
        assert report.errors[0].line == 3
        assert report.errors[0].details == {"section": "A"}

    def test_empty_title(self):
        report = validate_document("= \n== A\nText, a.")
        assert _error_codes(report) == [ErrorCode.TITLE_EMPTY]

    def test_missing_title_allowed_by_default(self):
        assert validate_document("== A\nText, a.").is_valid

    def test_missing_title_required(self):
        report = validate_document("== A\nText, a.", require_title=True)
        assert _error_codes(report) == [ErrorCode.TITLE_MISSING]


# ---------------------------------------------------------------------------
# Stage B — treść
# ---------------------------------------------------------------------------

class TestContent:
    def test_title_without_sections(self):
        report = validate_document("= Doc\nSome text.")
        assert _error_codes(report) == [ErrorCode.NO_SECTIONS]

    def test_empty_publication(self):
        assert validate_document("= Doc\nindex card").is_valid

    def test_empty_publication_case_and_blank_lines(self):
        assert validate_document("= Doc\n\nIndex Card\n").is_valid

    def test_empty_publication_with_extra_line(self):
        report = validate_document("= Doc\nindex card\nmore")
        assert _error_codes(report) == [ErrorCode.NO_SECTIONS]

    def test_no_content(self):
        assert _error_codes(validate_document("")) == [ErrorCode.NO_CONTENT]
        assert _error_codes(validate_document("just text")) == [ErrorCode.NO_CONTENT]


# ---------------------------------------------------------------------------
# Stage C — ostrzeżenia
# ---------------------------------------------------------------------------

class TestWarnings:
    def test_empty_section_is_not_fatal(self):
        report = validate_document("= Doc\n== Empty\n== Full\nText, here.")
        assert report.is_valid
        assert _warning_codes(report) == [ErrorCode.SECTION_EMPTY]
        assert report.warnings[0].line == 2

    def test_ambiguous_author(self):
        report = validate_document("= Doc\n== A\nJan Kowalski\n\nText, here.")
        assert report.is_valid
        assert _warning_codes(report) == [ErrorCode.AMBIGUOUS_AUTHOR]
        assert report.warnings[0].line == 3
        assert report.warnings[0].expected_fix

    def test_invalid_attribute(self):
        report = validate_document("= Doc\n:auto-update: maybe\n== A\nText, a.")
        assert _warning_codes(report) == [ErrorCode.INVALID_ATTRIBUTE]
        assert report.warnings[0].line == 2

    def test_preamble_dropped_without_title(self):
        report = validate_document("Loose text, here.\n== A\nText, a.")
        assert report.is_valid
        assert _warning_codes(report) == [ErrorCode.PREAMBLE_DROPPED]


class TestReportSerialisation:
    def test_to_dict(self):
        report = validate_document("= One\n= Two\n== S\ntext here.")
        data = report.to_dict()
        assert data["is_valid"] is False
        assert data["errors"][0]["code"] == "E_TITLE_DUPLICATE"
        assert data["errors"][0]["line"] == 2
        assert data["warnings"] == []

    def test_codes(self):
        report = validate_document("= Doc\n== Empty\n== Full\nText, here.")
        assert report.codes == [ErrorCode.SECTION_EMPTY]
        assert ErrorCode.SECTION_EMPTY.is_warning
        assert not ErrorCode.NO_CONTENT.is_warning
