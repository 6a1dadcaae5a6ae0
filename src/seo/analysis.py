"""On-page SEO checks for a snapshot of a rendered page.

The snapshot is measured by the caller; nothing here fetches or parses HTML.
"""

from dataclasses import dataclass, field
from enum import Enum

TITLE_RANGE = (30, 60)
DESCRIPTION_RANGE = (120, 160)
PERFORMANCE_THRESHOLD = 80


class CheckStatus(str, Enum):
    GOOD = "good"
    WARNING = "warning"


class Grade(str, Enum):
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class Priority(str, Enum):
    CRITICAL = "critical"
    IMPORTANT = "important"
    SUGGESTION = "suggestion"


@dataclass(frozen=True)
class PageSnapshot:
    title: str = ""
    description: str = ""
    h1_count: int = 0
    h2_count: int = 0
    h3_count: int = 0
    image_count: int = 0
    images_with_alt: int = 0
    internal_links: int = 0
    external_links: int = 0
    mobile_score: int = 0
    desktop_score: int = 0
    ssl: bool = False
    has_schema: bool = False
    has_robots_meta: bool = False


@dataclass(frozen=True)
class TextCheck:
    content: str
    length: int
    status: CheckStatus
    suggestions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Recommendation:
    priority: Priority
    category: str
    title: str
    description: str


@dataclass(frozen=True)
class SEOReport:
    score: int
    grade: Grade
    title: TextCheck
    description: TextCheck
    heading_issues: list[str]
    image_issues: list[str]
    recommendations: list[Recommendation]


def check_length(content: str, bounds: tuple[int, int], label: str) -> TextCheck:
    low, high = bounds
    length = len(content)
    suggestions = []
    if length < low:
        suggestions.append(f"{label} is too short")
    elif length > high:
        suggestions.append(f"{label} is too long")
    status = CheckStatus.GOOD if not suggestions else CheckStatus.WARNING
    return TextCheck(content=content, length=length, status=status, suggestions=suggestions)


def grade_for(score: int) -> Grade:
    if score >= 80:
        return Grade.GOOD
    if score >= 60:
        return Grade.FAIR
    return Grade.POOR


def heading_issues(page: PageSnapshot) -> list[str]:
    if page.h1_count == 0:
        return ["Missing H1 tag"]
    if page.h1_count > 1:
        return ["Multiple H1 tags found"]
    return []


def score_page(page: PageSnapshot, title: TextCheck, description: TextCheck) -> int:
    checks = [
        (title.status == CheckStatus.GOOD, 15),
        (description.status == CheckStatus.GOOD, 15),
        (page.h1_count == 1, 10),
        (page.images_with_alt >= page.image_count, 10),
        (page.mobile_score > PERFORMANCE_THRESHOLD, 15),
        (page.desktop_score > PERFORMANCE_THRESHOLD, 15),
        (page.ssl, 10),
        (page.has_schema, 10),
    ]
    return sum(points for passed, points in checks if passed)


def recommendations_for(
    page: PageSnapshot, title: TextCheck, description: TextCheck
) -> list[Recommendation]:
    recommendations = []
    if title.status != CheckStatus.GOOD:
        recommendations.append(
            Recommendation(
                Priority.CRITICAL,
                "Title",
                "Optimize Page Title",
                "Your page title should be between 30-60 characters for optimal display in search results.",
            )
        )
    if description.status != CheckStatus.GOOD:
        recommendations.append(
            Recommendation(
                Priority.CRITICAL,
                "Meta Description",
                "Improve Meta Description",
                "Meta description should be 120-160 characters to provide effective search result snippets.",
            )
        )
    if page.h1_count != 1:
        recommendations.append(
            Recommendation(
                Priority.IMPORTANT,
                "Content Structure",
                "Fix H1 Tag Usage",
                "Each page should have exactly one H1 tag for proper content hierarchy.",
            )
        )
    if page.images_with_alt < page.image_count:
        recommendations.append(
            Recommendation(
                Priority.IMPORTANT,
                "Images",
                "Add Alt Text to Images",
                "All images should have descriptive alt text for accessibility and SEO.",
            )
        )
    if not page.has_schema:
        recommendations.append(
            Recommendation(
                Priority.SUGGESTION,
                "Technical",
                "Implement Structured Data",
                "Add JSON-LD structured data to help search engines understand your content.",
            )
        )
    if page.mobile_score < PERFORMANCE_THRESHOLD:
        recommendations.append(
            Recommendation(
                Priority.CRITICAL,
                "Performance",
                "Improve Mobile Performance",
                "Mobile page speed is crucial for SEO rankings. Optimize images and reduce bundle size.",
            )
        )
    return recommendations


def analyze_page(page: PageSnapshot) -> SEOReport:
    title = check_length(page.title, TITLE_RANGE, "Title")
    description = check_length(page.description, DESCRIPTION_RANGE, "Description")
    score = score_page(page, title, description)
    image_issues = []
    if page.images_with_alt < page.image_count:
        image_issues.append("Some images missing alt text")

    return SEOReport(
        score=score,
        grade=grade_for(score),
        title=title,
        description=description,
        heading_issues=heading_issues(page),
        image_issues=image_issues,
        recommendations=recommendations_for(page, title, description),
    )
