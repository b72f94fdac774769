import pytest

from uae_law.schemas.document_contract import ParsedDefinition
from uae_law.services.extraction.definition_extractor import (
    MAX_DEFINITION_LENGTH,
    DefinitionExtractor,
    deduplicate_definitions,
)
from uae_law.utils.pattern_manager import VocabularyKey, get_pattern_manager


@pytest.fixture
def extractor():
    return DefinitionExtractor()


def vocab(key):
    return get_pattern_manager().get_vocabulary(key)


def test_english_terms_in_document_order(extractor):
    body = (
        "<p><b>Definitions</b></p>"
        "<p>&ldquo;Controller&rdquo; means the person who determines the purposes. "
        "&ldquo;Data Subject&rdquo; means the natural person to whom data relates.</p>"
    )
    definitions = extractor.extract(body, vocab(VocabularyKey.FEDERAL_EN), "art1")
    assert [(d.term, d.definition) for d in definitions] == [
        ("Controller", "“Controller” the person who determines the purposes."),
        ("Data Subject", "“Data Subject” the natural person to whom data relates."),
    ]
    assert all(d.source_provision == "art1" for d in definitions)


def test_includes_and_has_the_meaning(extractor):
    body = (
        'Definition. "Processing" includes collection and storage of data. '
        '"Court" has the meaning given in the Courts Law.'
    )
    definitions = extractor.extract(body, vocab(VocabularyKey.DIFC), "s3")
    assert [d.term for d in definitions] == ["Processing", "Court"]
    assert definitions[1].definition == "“Court” given in the Courts Law."


def test_body_without_definitions_marker_yields_nothing(extractor):
    body = '<p>"Personal Data" means any data relating to a natural person.</p>'
    assert extractor.extract(body, vocab(VocabularyKey.FEDERAL_EN), "art4") == []


def test_short_clauses_are_rejected(extractor):
    body = 'Definitions: "X" means ok. "Data" means information in any form.'
    definitions = extractor.extract(body, vocab(VocabularyKey.ADGM), "s1")
    assert [d.term for d in definitions] == ["Data"]


def test_arabic_definitions(extractor):
    body = (
        "<p>التعريفات</p>"
        "<p>«البيانات الشخصية»: أي بيانات تتعلق بشخص طبيعي.</p>"
        "<p>«المتحكم»: الشخص الذي يحدد أغراض المعالجة.</p>"
    )
    definitions = extractor.extract(body, vocab(VocabularyKey.FEDERAL_AR), "art1")
    assert [(d.term, d.definition) for d in definitions] == [
        ("البيانات الشخصية", "“البيانات الشخصية” أي بيانات تتعلق بشخص طبيعي."),
        ("المتحكم", "“المتحكم” الشخص الذي يحدد أغراض المعالجة."),
    ]


def test_definition_text_is_capped(extractor):
    body = 'Definitions "Data" means ' + "a" * (MAX_DEFINITION_LENGTH + 500)
    definitions = extractor.extract(body, vocab(VocabularyKey.FEDERAL_EN))
    assert len(definitions[0].definition) == MAX_DEFINITION_LENGTH
    assert definitions[0].source_provision is None


def test_deduplicate_keeps_longest_per_term():
    survivors = deduplicate_definitions([
        ParsedDefinition(term="Data", definition="“Data” short.", source_provision="art1"),
        ParsedDefinition(term="Controller", definition="“Controller” the person.", source_provision="art1"),
        ParsedDefinition(term="Data", definition="“Data” a much longer clause.", source_provision="art9"),
    ])
    assert [(d.term, d.source_provision) for d in survivors] == [("Data", "art9"), ("Controller", "art1")]
