from dataclasses import dataclass
from datetime import date
from xml.sax.saxutils import escape


@dataclass(frozen=True)
class SitemapPage:
    path: str
    priority: str
    changefreq: str


PUBLIC_PAGES = [
    SitemapPage("/", "1.0", "weekly"),
    SitemapPage("/venue", "0.8", "monthly"),
    SitemapPage("/gallery", "0.8", "weekly"),
    SitemapPage("/rsvp", "0.9", "monthly"),
    SitemapPage("/social", "0.7", "daily"),
    SitemapPage("/gift-registry", "0.8", "monthly"),
]


def build_sitemap(origin: str, last_modified: date, pages=PUBLIC_PAGES) -> str:
    origin = origin.rstrip("/")
    entries = "\n".join(
        "  <url>\n"
        f"    <loc>{escape(origin + page.path)}</loc>\n"
        f"    <lastmod>{last_modified.isoformat()}</lastmod>\n"
        f"    <changefreq>{page.changefreq}</changefreq>\n"
        f"    <priority>{page.priority}</priority>\n"
        "  </url>"
        for page in pages
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        f"{entries}\n"
        "</urlset>"
    )


def build_robots_txt(origin: str) -> str:
    return (
        "User-agent: *\n"
        "Allow: /\n"
        "Disallow: /admin\n"
        "Disallow: /api/\n"
        "\n"
        f"Sitemap: {origin.rstrip('/')}/sitemap.xml\n"
    )
