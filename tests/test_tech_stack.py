"""
Tech stack normalization tests.
"""

import pytest

from talentbridge.normalization.tech_stack import (
    OTHER_GROUP,
    group_tech_stack,
    normalize_tech_label,
    normalize_tech_stack,
)


class TestNormalizeTechLabel:

    @pytest.mark.parametrize("raw, expected", [
        ("reactjs", "React"),
        ("React", "React"),
        ("  react.js ", "React"),
        ("React Native", "React Native"),
        ("nextjs", "Next.js"),
        ("Vue3", "Vue.js"),
        ("Nuxt", "Vue.js"),
        ("JavaScript", "JavaScript"),
        ("Java", "Java"),
        ("Postgres", "PostgreSQL"),
        ("MySQL", "MySQL"),
        ("T-SQL", "SQL"),
        ("Golang", "Go"),
        ("go", "Go"),
        ("iOS", "iOS"),
        ("Django", "Django"),
        ("MongoDB", "MongoDB"),
        ("Google Cloud", "Google Cloud"),
        ("Tailwind", "Tailwind CSS"),
        ("k8s", "Kubernetes"),
    ])
    def test_known_aliases(self, raw, expected):
        assert normalize_tech_label(raw) == expected

    def test_unknown_label_is_capitalized(self):
        assert normalize_tech_label("unknownTool") == "Unknowntool"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty_input(self, raw):
        assert normalize_tech_label(raw) is None


class TestNormalizeTechStack:

    def test_mixed_input(self):
        result = normalize_tech_stack(["reactjs", "Vue3", "unknownTool"])
        assert result == {"React", "Vue.js", "Unknowntool"}

    def test_deduplicates_variants(self):
        assert normalize_tech_stack(["react", "ReactJS", "react.js"]) == {"React"}

    def test_skips_empty_entries(self):
        assert normalize_tech_stack(["", None, "python"]) == {"Python"}

    def test_none_input(self):
        assert normalize_tech_stack(None) == set()

    def test_short_names_do_not_match_inside_other_tools(self):
        result = normalize_tech_stack(["axios", "Algolia", "Google Analytics"])
        assert result == {"Axios", "Algolia", "Google analytics"}

    def test_idempotent(self):
        once = normalize_tech_stack(["reactjs", "postgres", "golang", "kafka"])
        assert normalize_tech_stack(once) == once


class TestGroupTechStack:

    def test_groups_into_buckets(self):
        grouped = group_tech_stack(["React", "Python", "AWS", "Unknowntool"])
        assert grouped == {
            "Frontend": ["React"],
            "Backend": ["Python"],
            "Cloud & DevOps": ["AWS"],
            OTHER_GROUP: ["Unknowntool"],
        }

    def test_empty_buckets_are_omitted(self):
        assert group_tech_stack([]) == {}

    def test_bucket_order_is_fixed(self):
        grouped = group_tech_stack(["PyTorch", "Docker", "React"])
        assert list(grouped) == ["Frontend", "Cloud & DevOps", "AI/ML"]

    def test_duplicates_listed_once(self):
        assert group_tech_stack(["React", "React"]) == {"Frontend": ["React"]}
