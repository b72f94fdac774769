import pytest

from uae_law.services.search.fts_search import FTSSearchService, get_search_service

pytestmark = pytest.mark.integration


@pytest.fixture
def service():
    return FTSSearchService(max_limit=50)


def _ids(response):
    return {hit.document_id for hit in response.results}


class TestSearch:
    def test_primary_variant(self, seeded_db, service):
        response = service.search(seeded_db, "personal data")
        assert _ids(response) == {"fdl-45-2021", "adgm-dpr-2021"}
        assert response.metadata.variant == 0
        assert response.metadata.variants_tried == 1
        assert response.metadata.fts_query == "personal data"
        assert response.metadata.total_results == len(response.results)
        assert response.metadata.search_type == "fts5"
        assert response.metadata.error is None

    def test_hits_are_ranked_by_bm25(self, seeded_db, service):
        results = service.search(seeded_db, "personal data").results
        scores = [hit.score for hit in results]
        assert scores == sorted(scores)

    def test_hit_fields(self, seeded_db, service):
        hit = service.search(seeded_db, "Controller", document_id="difc-law-5-2020").results[0]
        assert hit.provision_ref == "s10"
        assert hit.document_title == "DIFC Data Protection Law, DIFC Law No. 5 of 2020"
        assert hit.chapter == "Part 2: General Requirements"
        assert hit.title == "Accountability"
        assert hit.legal_zone == "difc"
        assert hit.status == "in_force"
        assert ">>>Controller<<<" in hit.snippet

    def test_zone_filter(self, seeded_db, service):
        response = service.search(seeded_db, "personal data", legal_zone="adgm")
        assert _ids(response) == {"adgm-dpr-2021"}

    def test_status_filter(self, seeded_db, service):
        assert _ids(service.search(seeded_db, "telecommunications", status="repealed")) == {"fl-3-2003"}
        assert service.search(seeded_db, "telecommunications", status="in_force").results == []

    def test_arabic_query(self, seeded_db, service):
        assert _ids(service.search(seeded_db, "المبينة")) == {"fdl-34-2021"}

    def test_provision_title_is_searchable(self, seeded_db, service):
        hits = service.search(seeded_db, "Accountability").results
        assert [(h.document_id, h.provision_ref) for h in hits] == [("difc-law-5-2020", "s10")]


class TestFallbacks:
    def test_space_joined_fallback(self, seeded_db, service):
        response = service.search(seeded_db, '"natural data" person')
        assert response.metadata.variant == 1
        assert response.metadata.variants_tried == 2
        assert response.metadata.fts_query == "natural data person"
        assert [h.provision_ref for h in response.results] == ["art1"]

    def test_or_fallback(self, seeded_db, service):
        response = service.search(seeded_db, "accountability unicorn")
        assert response.metadata.variant == 1
        assert response.metadata.fts_query == "accountability OR unicorn"
        assert _ids(response) == {"difc-law-5-2020"}

    def test_nothing_found_reports_last_variant(self, seeded_db, service):
        response = service.search(seeded_db, "unicorn griffin")
        assert response.results == []
        assert response.metadata.variants_tried == 2
        assert response.metadata.fts_query == "unicorn OR griffin"
        assert response.metadata.total_results == 0
        assert response.metadata.error is None


class TestInputHandling:
    @pytest.mark.parametrize("query", ["", "!!! ***", "AND OR"])
    def test_no_valid_terms(self, seeded_db, service, query):
        response = service.search(seeded_db, query)
        assert response.results == []
        assert response.metadata.error == "No valid terms for FTS query"
        assert response.metadata.variants_tried == 0

    def test_syntax_is_sanitized_before_matching(self, seeded_db, service):
        response = service.search(seeded_db, 'content:"personal ^data')
        assert response.metadata.error is None
        assert "fdl-45-2021" in _ids(response)

    def test_rejected_query_counts_as_no_results(self, seeded_db, service):
        assert service._run(seeded_db, "data AND", None, None, None, 10) == []

    @pytest.mark.parametrize("limit, expected", [(None, 10), (0, 1), (-5, 1), (3, 3), (1000, 50)])
    def test_clamp_limit(self, service, limit, expected):
        assert service.clamp_limit(limit) == expected

    def test_limit_applies(self, seeded_db, service):
        response = service.search(seeded_db, "personal data", limit=1)
        assert len(response.results) == 1
        assert response.metadata.limit == 1


def test_singleton():
    assert get_search_service() is get_search_service()
