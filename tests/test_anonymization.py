"""
Triple-Blind anonymization tests: candidate buckets and company descriptors.
"""

import pytest

from talentbridge.anonymization.candidate import (
    NOT_RATED,
    anonymize_candidate,
    anonymize_experience,
    anonymize_region,
    anonymize_region_broad,
    anonymize_salary,
    display_candidate_name,
    display_contact_field,
    explain_missing_field,
    generate_anonymous_id,
    get_fit_label,
    get_motivation_status,
)
from talentbridge.anonymization.company import (
    MASKED_DESCRIPTOR,
    anonymize_company_name,
    format_anonymous_company,
    format_work_model,
)
from talentbridge.models import CandidateRecord, CompanyAttributes


@pytest.fixture
def candidate():
    return CandidateRecord(
        id="c-1",
        full_name="Anna Schmidt",
        skills=["Python", "Django", "AWS"],
        experience_years=7,
        expected_salary=72000,
        availability_date="01.03.2026",
        notice_period="3 Monate",
        city="Berlin, Germany",
        cv_ai_summary="Backend engineer",
        cv_ai_bullets=["Led migration"],
    )


@pytest.fixture
def company():
    return CompanyAttributes(
        name="Acme Pay",
        industry="FinTech",
        company_size_band="51-200",
        funding_stage="series_a",
        tech_stack=["React", "Node.js", "PostgreSQL", "Kubernetes"],
        remote_type="hybrid",
        city="Berlin",
        urgency="urgent",
    )


class TestCandidateBuckets:

    @pytest.mark.parametrize("years, expected", [
        (None, "Nicht angegeben"),
        (0, "0-2 Jahre"),
        (1, "0-2 Jahre"),
        (2, "3-5 Jahre"),
        (4, "3-5 Jahre"),
        (5, "5-10 Jahre"),
        (7, "5-10 Jahre"),
        (10, "10+ Jahre"),
        (12, "10+ Jahre"),
    ])
    def test_experience(self, years, expected):
        assert anonymize_experience(years) == expected

    @pytest.mark.parametrize("salary, expected", [
        (55000, "€50,000 - €60,000"),
        (50000, "€50,000 - €60,000"),
        (99999, "€90,000 - €100,000"),
        (120000, "€120,000 - €130,000"),
        (None, "Nicht freigegeben"),
        (0, "Nicht freigegeben"),
        (float("inf"), "Nicht freigegeben"),
        (float("-inf"), "Nicht freigegeben"),
        (float("nan"), "Nicht freigegeben"),
    ])
    def test_salary(self, salary, expected):
        assert anonymize_salary(salary) == expected

    @pytest.mark.parametrize("city, expected", [
        ("Berlin, Germany", "Berlin Area"),
        ("München", "München Area"),
        (None, "Nicht angegeben"),
        ("  ", "Nicht angegeben"),
        (", Germany", "Nicht angegeben"),
        ("Frankfurt  am Main, Hessen", "Frankfurt am Main Area"),
    ])
    def test_region(self, city, expected):
        assert anonymize_region(city) == expected

    @pytest.mark.parametrize("city, expected", [
        ("München", "Süddeutschland"),
        ("Hamburg, Germany", "Norddeutschland"),
        ("Zürich", "Schweiz"),
        ("Wien", "Österreich"),
        ("Tokyo", "DACH"),
        (None, "DACH"),
    ])
    def test_broad_region(self, city, expected):
        assert anonymize_region_broad(city) == expected


class TestAnonymousId:

    def test_truncates_and_uppercases(self):
        assert generate_anonymous_id("abcdef123456") == "Kandidat #ABCDEF12"

    def test_short_id(self):
        assert generate_anonymous_id("ab1") == "Kandidat #AB1"

    @pytest.mark.parametrize("identifier", [None, "", "  "])
    def test_blank_id(self, identifier):
        assert generate_anonymous_id(identifier) == "Kandidat #ANONYM"

    def test_stable(self):
        assert generate_anonymous_id("sub-42-xyz") == generate_anonymous_id("sub-42-xyz")

    def test_name_only_after_reveal(self):
        assert display_candidate_name("Anna Schmidt", "abcdef12", revealed=True) == "Anna Schmidt"
        assert display_candidate_name("Anna Schmidt", "abcdef12") == "Kandidat #ABCDEF12"
        assert display_candidate_name(None, "abcdef12", revealed=True) == "Kandidat #ABCDEF12"

    def test_contact_fields_locked_until_opt_in(self):
        assert display_contact_field("anna@example.com") == "🔒 Verborgen bis Opt-In"
        assert display_contact_field("anna@example.com", revealed=True) == "anna@example.com"
        assert display_contact_field(None, revealed=True) == "Nicht angegeben"


class TestAnonymizeCandidate:

    def test_builds_anonymous_view(self, candidate):
        view = anonymize_candidate(candidate, "9f8e7d6c5b4a", match_score=82)

        assert view.anonymous_id == "Kandidat #9F8E7D6C"
        assert view.skills == ["Python", "Django", "AWS"]
        assert view.experience_range == "5-10 Jahre"
        assert view.salary_expectation == "€70,000 - €80,000"
        assert view.region == "Berlin Area"
        assert view.availability == "01.03.2026"
        assert view.match_score == 82
        assert view.summary is None

    def test_never_contains_identity(self, candidate):
        dumped = anonymize_candidate(candidate, "9f8e7d6c5b4a").model_dump_json()
        assert "Anna" not in dumped
        assert "Schmidt" not in dumped

    def test_location_override_and_broad_region(self, candidate):
        view = anonymize_candidate(candidate, "x", location="Stuttgart", broad_region=True)
        assert view.region == "Süddeutschland"

    def test_notice_period_fallback(self):
        view = anonymize_candidate({"notice_period": "3 Monate"}, "x")
        assert view.availability == "3 Monate"

    def test_empty_record(self):
        view = anonymize_candidate({}, None)
        assert view.anonymous_id == "Kandidat #ANONYM"
        assert view.experience_range == "Nicht angegeben"
        assert view.salary_expectation == "Nicht freigegeben"
        assert view.region == "Nicht angegeben"
        assert view.availability is None
        assert view.match_score is None

    def test_null_skills(self):
        view = anonymize_candidate({"skills": None, "cv_ai_bullets": None}, "abcdef123")
        assert view.skills == []
        assert view.anonymous_id == "Kandidat #ABCDEF12"

    def test_idempotent(self, candidate):
        assert anonymize_candidate(candidate, "abc") == anonymize_candidate(candidate, "abc")


class TestLabels:

    @pytest.mark.parametrize("score, label", [
        (90, "Geeignet"),
        (75, "Geeignet"),
        (60, "Grenzwertig"),
        (10, "Nicht geeignet"),
    ])
    def test_fit_label(self, score, label):
        assert get_fit_label(score).label == label

    def test_explicit_assessment_wins(self):
        assert get_fit_label(95, "nicht_geeignet").color == "red"

    def test_unrated(self):
        assert get_fit_label(None) == NOT_RATED

    def test_motivation(self):
        assert get_motivation_status("hoch").color == "green"
        assert get_motivation_status(None).label == "Unbekannt"

    def test_missing_field_explanations(self):
        assert explain_missing_field("salary") == "Nicht freigegeben"
        assert explain_missing_field("motivation", has_interview=True) == "Im Interview nicht besprochen"
        assert explain_missing_field("motivation").startswith("Nicht erfasst")
        assert explain_missing_field("whatever") == "Keine Angabe"


class TestCompanyDescriptor:

    def test_full_descriptor(self, company):
        assert format_anonymous_company(company) == (
            "[FinTech | 51-200 MA | Series A | React/Node.js/PostgreSQL "
            "| Hybrid · Berlin | Dringend]"
        )

    def test_revealed_shows_exact_name(self, company):
        assert format_anonymous_company(company, revealed=True) == "Acme Pay"

    def test_revealed_without_name_stays_anonymous(self, company):
        attributes = company.model_copy(update={"name": None})
        assert format_anonymous_company(attributes, revealed=True).startswith("[FinTech")

    def test_name_never_leaks(self, company):
        leaky = company.model_copy(update={
            "industry": "Acme Pay Payments",
            "tech_stack": ["acme pay SDK", "React"],
            "city": "Berlin",
        })
        descriptor = format_anonymous_company(leaky)

        assert "acme pay" not in descriptor.lower()
        assert descriptor.startswith("[Unternehmen")
        assert "React" not in descriptor  # whole tech preview part dropped

    def test_industry_equal_to_name(self):
        descriptor = format_anonymous_company({"name": "FinTech", "industry": "FinTech"})
        assert "fintech" not in descriptor.lower()
        assert descriptor == "[Unternehmen]"

    def test_masked_when_name_spans_parts(self):
        # the name only appears across two joined parts
        descriptor = format_anonymous_company({
            "name": "B | 5",
            "industry": "Retail B",
            "company_size_band": "5",
        })
        assert descriptor == MASKED_DESCRIPTOR

    def test_null_tech_stack(self):
        assert format_anonymous_company({"industry": "SaaS", "tech_stack": None}) == "[SaaS]"

    def test_empty_attributes(self):
        assert format_anonymous_company({}) == "[Unternehmen]"

    def test_standard_urgency_omitted(self, company):
        calm = company.model_copy(update={"urgency": "standard"})
        assert "Dringend" not in format_anonymous_company(calm)

    def test_unknown_codes_are_humanized(self):
        descriptor = format_anonymous_company({
            "industry": "SaaS",
            "funding_stage": "series_e",
        })
        assert descriptor == "[SaaS | Series E]"

    def test_idempotent(self, company):
        assert format_anonymous_company(company) == format_anonymous_company(company)


class TestCompanyHelpers:

    def test_anonymize_company_name(self):
        assert anonymize_company_name("FinTech") == "[FinTech] Unternehmen"
        assert anonymize_company_name(None) == "[Unternehmen]"

    @pytest.mark.parametrize("remote_type, city, expected", [
        ("remote", None, "Full Remote"),
        ("onsite", "Köln", "Vor Ort · Köln"),
        (None, "Köln", "Köln"),
        (None, None, None),
    ])
    def test_work_model(self, remote_type, city, expected):
        assert format_work_model(remote_type, city) == expected
