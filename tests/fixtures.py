"""Shared drafts for the scoring tests."""

KEYWORD = "garden tools"

# 82 words, 8 short active sentences, one keyword mention
PARAGRAPH = (
    "Good garden tools make yard work fast and fun. "
    "A sharp spade cuts through hard soil with ease. "
    "You can prepare a flower bed for spring planting within an hour. "
    "Keep each blade clean and dry after you use it. "
    "Hang your rakes on a wall so they stay in shape. "
    "Oil the metal parts once a month to stop rust. "
    "Buy tools that feel good in your hands. "
    "Your shoulders and arms will thank you at the end of the afternoon."
)

JSON_LD = (
    '<script type="application/ld+json">'
    '{"@context": "https://schema.org", "@type": "Article", "headline": "Garden Tools"}'
    "</script>"
)


def _paragraphs(n: int) -> str:
    return "\n".join(f"<p>{PARAGRAPH}</p>" for _ in range(n))


OPTIMAL_HTML = "\n".join([
    '<link rel="canonical" href="https://example.com/blog/garden-tools-guide">',
    JSON_LD,
    "<h1>A Simple Guide to Garden Tools</h1>",
    _paragraphs(4),
    '<img src="/img/spade.jpg" alt="garden tools on a potting bench">',
    "<h2>Why Garden Tools Matter</h2>",
    _paragraphs(4),
    '<p>Read our <a href="/blog/soil-care">soil care guide</a> next.</p>',
    "<h2>How to Care for Your Kit</h2>",
    _paragraphs(3),
    '<img src="/img/rake.jpg" alt="a clean rake hanging on a shed wall">',
])

OPTIMAL_INPUT = {
    "title": "Garden Tools Guide: How to Choose and Care for Them",
    "metaDescription": (
        "Learn how to choose garden tools that last for years, keep every blade sharp, "
        "and stop rust with a few simple habits each season."
    ),
    "content": OPTIMAL_HTML,
    "primaryKeyword": KEYWORD,
    "secondaryKeywords": ["spade"],
    "url": "https://example.com/blog/garden-tools-guide",
    "featuredImage": {"url": "https://example.com/img/cover.jpg", "alt": "garden tools"},
}


def minimal_input(**overrides) -> dict:
    data = {
        "title": "",
        "meta_description": "",
        "content": "<p>hi</p>",
        "primary_keyword": "x",
    }
    data.update(overrides)
    return data
