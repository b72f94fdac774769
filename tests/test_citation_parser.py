import pytest

from uae_law.services.citation.parser import Citation, CitationParser, get_citation_parser, parse_citation


@pytest.mark.parametrize("text, document_ref, article_ref, pattern", [
    ("المادة 2 من المرسوم بقانون اتحادي رقم 45 لسنة 2021",
     "المرسوم بقانون اتحادي رقم 45 لسنة 2021", "2", "arabic"),
    ("Article 2, Federal Decree-Law No. 45 of 2021", "Federal Decree-Law No. 45 of 2021", "2", "article_prefix"),
    ("Art. 5A PDPL", "PDPL", "5A", "article_prefix"),
    ("art 2 pdpl", "pdpl", "2", "article_prefix"),
    ("Section 1, ADGM Data Protection Regulations 2021",
     "ADGM Data Protection Regulations 2021", "1", "section_prefix"),
    ("s. 12 DIFC DPL", "DIFC DPL", "12", "section_prefix"),
    ("Federal Decree-Law No. 45 of 2021, Article 2", "Federal Decree-Law No. 45 of 2021", "2", "article_suffix"),
    ("DIFC Law No. 5 of 2020, Section 10", "DIFC Law No. 5 of 2020", "10", "section_suffix"),
    ("fdl-45-2021, art. 2", "fdl-45-2021", "2", "article_suffix"),
    ("difc-law-5-2020; s. 10", "difc-law-5-2020", "10", "section_suffix"),
])
def test_supported_shapes(text, document_ref, article_ref, pattern):
    citation = parse_citation(text)
    assert citation == Citation(document_ref=document_ref, article_ref=article_ref, pattern=pattern)


def test_arabic_indic_digits_are_normalized():
    citation = parse_citation("المادة ١٢ قانون العمل")
    assert citation.article_ref == "12"
    assert citation.document_ref == "قانون العمل"


def test_title_with_comma_splits_on_last_provision_marker():
    citation = parse_citation("DIFC Data Protection Law, DIFC Law No. 5 of 2020; s. 10")
    assert citation.document_ref == "DIFC Data Protection Law, DIFC Law No. 5 of 2020"
    assert citation.article_ref == "10"


def test_title_with_comma_and_no_provision_is_bare():
    citation = parse_citation("DIFC Data Protection Law, DIFC Law No. 5 of 2020")
    assert citation == Citation(document_ref="DIFC Data Protection Law, DIFC Law No. 5 of 2020")
    assert citation.pattern == "bare"
    assert citation.article_ref is None


def test_bare_reference_is_trimmed():
    assert parse_citation("   PDPL  ") == Citation(document_ref="PDPL")


@pytest.mark.parametrize("text", ["", "   ", None])
def test_empty_input(text):
    assert parse_citation(text) is None


def test_pattern_order():
    assert CitationParser().pattern_names == [
        "arabic",
        "article_prefix",
        "section_prefix",
        "article_suffix",
        "section_suffix",
        "id_based",
    ]


def test_id_based_pattern_shape():
    parser = CitationParser()
    id_based = next(c for c in parser.compiled_patterns if c["name"] == "id_based")["compiled"]
    match = id_based.match("fdl-45-2021, art. 2")
    assert match.groups() == ("fdl-45-2021", "2")
    assert id_based.match("PDPL, art. 2") is None


def test_singleton_and_to_dict():
    assert get_citation_parser() is get_citation_parser()
    assert parse_citation("Art. 2 PDPL").to_dict() == {
        "document_ref": "PDPL",
        "article_ref": "2",
        "pattern": "article_prefix",
    }
