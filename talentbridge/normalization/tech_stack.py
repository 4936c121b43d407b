"""
Tech stack normalization.

Maps free-text technology labels onto a canonical vocabulary and groups
them into display buckets. Table order is significant: a label that
contains several variants is assigned to the first canonical entry.
"""

import logging
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


# (canonical, variants) - ordered, first match wins.
# Longer/more specific names come before the names they contain
# (React Native > React, JavaScript > Java, PostgreSQL > SQL).
TECH_ALIASES: tuple[tuple[str, tuple[str, ...]], ...] = (
    # Frontend
    ("React Native", ("react native", "react-native", "reactnative")),
    ("Next.js", ("next.js", "nextjs", "next js")),
    ("React", ("react", "reactjs", "react.js")),
    ("Vue.js", ("vue", "vuejs", "vue.js", "vue3", "nuxt")),
    ("Angular", ("angular", "angularjs")),
    ("Svelte", ("svelte", "sveltekit")),
    ("TypeScript", ("typescript",)),
    ("JavaScript", ("javascript", "ecmascript", "es6")),
    ("Tailwind CSS", ("tailwind",)),
    ("HTML/CSS", ("html", "css", "scss", "sass")),

    # Backend
    ("Node.js", ("node", "nodejs", "node.js", "express")),
    ("NestJS", ("nestjs", "nest.js")),
    ("Django", ("django",)),
    ("FastAPI", ("fastapi",)),
    ("Flask", ("flask",)),
    ("Python", ("python",)),
    ("Spring Boot", ("spring", "springboot")),
    ("Kotlin", ("kotlin",)),
    ("Java", ("java",)),
    ("C#/.NET", ("c#", ".net", "dotnet", "csharp")),
    ("C++", ("c++", "cpp")),
    ("PHP", ("php", "laravel", "symfony")),
    ("Ruby on Rails", ("ruby", "rails")),
    ("Rust", ("rust",)),
    ("GraphQL", ("graphql",)),

    # Data
    ("PostgreSQL", ("postgres", "postgresql", "psql")),
    ("MySQL", ("mysql", "mariadb")),
    ("MongoDB", ("mongo", "mongodb")),
    ("Redis", ("redis",)),
    ("Elasticsearch", ("elasticsearch", "elastic", "opensearch")),
    ("Apache Kafka", ("kafka",)),
    ("Apache Spark", ("spark", "pyspark")),
    ("Snowflake", ("snowflake",)),
    ("dbt", ("dbt",)),
    ("SQL", ("sql", "tsql", "t-sql")),

    # Cloud & DevOps
    ("AWS", ("aws", "amazon web services")),
    ("Google Cloud", ("gcp", "google cloud")),
    ("Azure", ("azure",)),
    ("Kubernetes", ("kubernetes", "k8s")),
    ("Docker", ("docker",)),
    ("Terraform", ("terraform",)),
    ("CI/CD", ("ci/cd", "cicd", "jenkins", "github actions", "gitlab ci")),

    # Mobile
    ("Flutter", ("flutter", "dart")),
    ("Swift", ("swift", "swiftui")),
    ("Android", ("android",)),

    # AI/ML
    ("PyTorch", ("pytorch", "torch")),
    ("TensorFlow", ("tensorflow", "keras")),
    ("LLM", ("llm", "large language model", "gpt", "openai")),
    ("Machine Learning", ("machine learning", "scikit", "sklearn")),

    ("Go", ("golang",)),
)

# Names short enough to show up inside unrelated labels ("axios", "Algolia")
# only match when they are the whole label.
EXACT_ALIASES = {
    "go": "Go",
    "ios": "iOS",
}


TECH_GROUPS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Frontend", (
        "React", "Next.js", "Vue.js", "Angular", "Svelte",
        "TypeScript", "JavaScript", "HTML/CSS", "Tailwind CSS",
    )),
    ("Backend", (
        "Node.js", "NestJS", "Django", "FastAPI", "Flask", "Python",
        "Spring Boot", "Kotlin", "Java", "C#/.NET", "C++", "PHP",
        "Ruby on Rails", "Rust", "GraphQL", "Go",
    )),
    ("Cloud & DevOps", (
        "AWS", "Google Cloud", "Azure", "Kubernetes", "Docker",
        "Terraform", "CI/CD",
    )),
    ("Data", (
        "PostgreSQL", "MySQL", "MongoDB", "Redis", "Elasticsearch",
        "Apache Kafka", "Apache Spark", "Snowflake", "dbt", "SQL",
    )),
    ("Mobile", ("React Native", "Flutter", "Swift", "Android", "iOS")),
    ("AI/ML", ("PyTorch", "TensorFlow", "LLM", "Machine Learning")),
)

OTHER_GROUP = "Other"


def normalize_tech_label(raw: Optional[str]) -> Optional[str]:
    """
    Normalize a single label.
    Returns None for empty input; unmatched labels are capitalized.
    """
    if not raw:
        return None

    lowered = raw.strip().lower()
    if not lowered:
        return None

    if lowered in EXACT_ALIASES:
        return EXACT_ALIASES[lowered]

    for canonical, variants in TECH_ALIASES:
        for variant in variants:
            if lowered == variant or variant in lowered:
                return canonical

    return lowered.capitalize()


def normalize_tech_stack(raw_labels: Iterable[Optional[str]]) -> set[str]:
    """Normalize and deduplicate a list of free-text tech labels."""
    normalized = set()
    for raw in raw_labels or []:
        label = normalize_tech_label(raw)
        if label is not None:
            normalized.add(label)
    return normalized


def group_tech_stack(labels: Iterable[str]) -> dict[str, list[str]]:
    """
    Partition canonical labels into display buckets.

    Buckets keep the fixed TECH_GROUPS order with "Other" last.
    Empty buckets are left out.
    """
    grouped: dict[str, list[str]] = {name: [] for name, _ in TECH_GROUPS}
    grouped[OTHER_GROUP] = []

    for label in labels:
        bucket = OTHER_GROUP
        for name, members in TECH_GROUPS:
            if label in members:
                bucket = name
                break
        if label not in grouped[bucket]:
            grouped[bucket].append(label)

    return {name: members for name, members in grouped.items() if members}
