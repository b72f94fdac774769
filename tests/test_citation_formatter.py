import pytest

from conftest import DIFC_DPL_TITLE, PDPL_TITLE, make_document

from uae_law.db.builder import load_document
from uae_law.schemas.document_contract import LegalZone
from uae_law.services.citation.formatter import format_citation, format_resolved_citation, split_citation
from uae_law.services.citation.validator import resolve_citation


class TestFormatCitation:
    @pytest.mark.parametrize("style, expected", [
        ("full", "Article 2, Federal Decree-Law No. 45 of 2021"),
        ("short", "Art. 2, Federal Decree-Law No. 45 of 2021"),
        ("pinpoint", "Art. 2"),
    ])
    def test_federal_styles(self, style, expected):
        result = format_citation("Article 2, Federal Decree-Law No. 45 of 2021", style)
        assert result.formatted == expected
        assert result.format == style

    def test_default_style_is_full(self):
        assert format_citation("Art. 2 PDPL").formatted == "Article 2, PDPL"

    def test_short_style_drops_parenthetical(self):
        result = format_citation("Art. 5 Federal Law No. 2 of 2015 (Commercial Companies)", "short")
        assert result.formatted == "Art. 5, Federal Law No. 2 of 2015"

    @pytest.mark.parametrize("citation, style, expected", [
        ("Section 10, DIFC Law No. 5 of 2020", "full", "Section 10, DIFC Law No. 5 of 2020"),
        ("Section 10, DIFC Law No. 5 of 2020", "pinpoint", "s 10"),
        ("DIFC Law No. 5 of 2020, Section 10", "short", "s 10, DIFC Law No. 5 of 2020"),
        ("Article 3, ADGM Data Protection Regulations 2021", "full",
         "Section 3, ADGM Data Protection Regulations 2021"),
    ])
    def test_free_zone_laws_use_sections(self, citation, style, expected):
        assert format_citation(citation, style).formatted == expected

    @pytest.mark.parametrize("style", ["full", "short", "pinpoint"])
    def test_without_number_returns_law(self, style):
        assert format_citation("PDPL", style).formatted == "PDPL"

    def test_arabic_connective_is_not_part_of_the_law(self):
        result = format_citation("المادة 2 من المرسوم بقانون اتحادي رقم 45 لسنة 2021", "full")
        assert result.formatted == "Article 2, المرسوم بقانون اتحادي رقم 45 لسنة 2021"

    def test_original_is_preserved(self):
        result = format_citation("  Art. 2 PDPL ", "pinpoint")
        assert result.original == "  Art. 2 PDPL "
        assert result.formatted == "Art. 2"

    @pytest.mark.parametrize("citation", ["Art. 2 PDPL", "PDPL"])
    def test_unknown_style_raises(self, citation):
        with pytest.raises(ValueError):
            format_citation(citation, "bluebook")


@pytest.mark.parametrize("text, expected", [
    ("Article 2, PDPL", ("2", "PDPL")),
    ("PDPL, Art. 2", ("2", "PDPL")),
    ("s. 10 DIFC DPL", ("10", "DIFC DPL")),
    ("DIFC DPL; Section 10", ("10", "DIFC DPL")),
    ("PDPL", (None, "PDPL")),
])
def test_split_citation(text, expected):
    assert split_citation(text) == expected


@pytest.mark.integration
class TestFormatResolvedCitation:
    def test_federal(self, seeded_db):
        reference = resolve_citation(seeded_db, "Federal Decree-Law No. 45 of 2021, Article 2")
        assert format_resolved_citation(reference, "full") == f"Article 2, {PDPL_TITLE}"
        assert format_resolved_citation(reference, "pinpoint") == "Art. 2"

    def test_free_zone(self, seeded_db):
        reference = resolve_citation(seeded_db, "DIFC DPL, s. 10")
        assert format_resolved_citation(reference) == f"Section 10, {DIFC_DPL_TITLE}"
        assert format_resolved_citation(reference, "short") == f"s 10, {DIFC_DPL_TITLE}"

    @pytest.mark.parametrize("citation", [
        "difc-law-5-2020; s. 10",
        "difc-law-5-2020",
        "adgm-dpr-2021, s. 2",
        "Section 1, ADGM DPR",
    ])
    @pytest.mark.parametrize("style", ["full", "short", "pinpoint"])
    def test_free_zone_documents_never_use_articles(self, seeded_db, citation, style):
        reference = resolve_citation(seeded_db, citation)
        formatted = format_resolved_citation(reference, style)
        assert "Article" not in formatted
        assert "Art." not in formatted
        if reference.provision_ref:
            assert formatted.startswith(("Section ", "s "))

    def test_label_follows_stored_zone(self, seeded_db):
        load_document(seeded_db, make_document(
            "difc-law-2-2019", "Employment Law No. 2 of 2019", "Employment Law", LegalZone.DIFC,
            provisions=[("s4", "4", "An Employer shall keep records of each Employee.", None, None)],
        ), ingest_order=99)

        # Text alone does not say DIFC, so the free-text formatter assumes articles
        assert format_citation("Section 4, Employment Law", "pinpoint").formatted == "Art. 4"

        reference = resolve_citation(seeded_db, "Section 4, Employment Law")
        assert format_resolved_citation(reference, "pinpoint") == "s 4"
        assert format_resolved_citation(reference) == "Section 4, Employment Law No. 2 of 2019"

    def test_document_only(self, seeded_db):
        reference = resolve_citation(seeded_db, "PDPL")
        assert format_resolved_citation(reference, "pinpoint") == PDPL_TITLE

    def test_unknown_style_raises(self, seeded_db):
        reference = resolve_citation(seeded_db, "PDPL")
        with pytest.raises(ValueError):
            format_resolved_citation(reference, "oscola")
