"""
seo_content.py - On-page structure checks.

Title and meta description, heading usage, images / alt text, internal
links and the featured image.
"""

from __future__ import annotations

from typing import Optional

from seo_catalog import CheckList, make_check, max_score, passed
from seo_models import Check, ContentResult, FeaturedImage, Headings
from seo_text import NormalizedContent, element_text

TITLE_MIN, TITLE_MAX = 30, 60
META_MIN, META_MAX = 120, 160
MIN_H2 = 2


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'' if n == 1 else 's'}"


def contains_keyword(text: str, keyword: str) -> bool:
    """Case-insensitive literal substring match; an empty keyword never matches."""
    if not keyword:
        return False
    return keyword.lower() in text.lower()


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def extract_headings(doc: NormalizedContent) -> Headings:
    found: dict[str, list[str]] = {"h1": [], "h2": [], "h3": [], "h4": []}
    for tag in doc.document.find_all(list(found)):
        found[tag.name].append(element_text(tag))
    return Headings(**{level: tuple(texts) for level, texts in found.items()})


def count_images(doc: NormalizedContent) -> tuple[int, int]:
    """(total <img> tags, those with a non-empty alt attribute)."""
    imgs = doc.document.find_all("img")
    with_alt = sum(1 for img in imgs if (img.get("alt") or "").strip())
    return len(imgs), with_alt


def is_internal_href(href: str) -> bool:
    return href.startswith(("/", "#")) or "://" not in href


def count_links(doc: NormalizedContent) -> tuple[int, int]:
    """(internal, external) anchor counts; anchors without an href are ignored."""
    internal = external = 0
    for a in doc.document.find_all("a", href=True):
        href = a["href"].strip()
        if not href:
            continue
        if is_internal_href(href):
            internal += 1
        else:
            external += 1
    return internal, external


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def _title_length(title: str) -> Check:
    n = len(title)
    description = f"Your title is {n} characters"
    if n == 0:
        return make_check("title-length", status="fail", score=0, description=description,
                          suggestion="Add a title to your content")
    if n < TITLE_MIN:
        return make_check("title-length", status="warning", score=8, description=description,
                          suggestion=f"Title is too short ({n} chars). Aim for 50-60 characters.")
    if n > TITLE_MAX:
        return make_check("title-length", status="warning", score=10, description=description,
                          suggestion=f"Title is too long ({n} chars). Keep it under {TITLE_MAX} "
                                     "characters to avoid truncation in search results.")
    return passed("title-length", description)


def _title_keyword(title: str, keyword: str) -> Check:
    if contains_keyword(title, keyword):
        return passed("title-keyword", f'Title contains your primary keyword "{keyword}"')
    return make_check("title-keyword", status="fail", score=0,
                      description="Primary keyword not found in title",
                      suggestion=f'Add your primary keyword "{keyword}" to the title')


def _meta_length(meta: str) -> Check:
    n = len(meta)
    description = f"Meta description is {n} characters"
    if n == 0:
        return make_check("meta-length", status="fail", score=0, description=description,
                          suggestion="Add a meta description to improve click-through rates")
    if n < META_MIN:
        return make_check("meta-length", status="warning", score=5, description=description,
                          suggestion=f"Meta description is short ({n} chars). Aim for 150-160 characters.")
    if n > META_MAX:
        return make_check("meta-length", status="warning", score=7, description=description,
                          suggestion=f"Meta description is long ({n} chars). Keep it under {META_MAX} characters.")
    return passed("meta-length", description)


def _meta_keyword(meta: str, keyword: str) -> Check:
    if contains_keyword(meta, keyword):
        return passed("meta-keyword", "Meta description contains your primary keyword")
    return make_check("meta-keyword", status="warning", score=3,
                      description="Primary keyword not found in meta description",
                      suggestion="Include your primary keyword in the meta description")


def _h1(headings: Headings) -> Check:
    n = len(headings.h1)
    if n == 1:
        return passed("h1-heading", "Your content has one H1 heading")
    description = f"Your content has {n} H1 headings"
    if n == 0:
        return make_check("h1-heading", status="fail", score=0, description=description,
                          suggestion="Add exactly one H1 heading to your content")
    return make_check("h1-heading", status="warning", score=5, description=description,
                      suggestion=f"You have {n} H1 headings. Use only one H1 per page.")


def _h2(headings: Headings) -> Check:
    n = len(headings.h2)
    description = f"Your content has {_plural(n, 'H2 subheading')}"
    if n == 0:
        return make_check("h2-headings", status="warning", score=3, description=description,
                          suggestion="Add H2 subheadings to break up your content")
    if n < MIN_H2:
        return make_check("h2-headings", status="warning", score=5, description=description,
                          suggestion="Consider adding more H2 subheadings for better structure")
    return passed("h2-headings", description)


def _images(total: int) -> Check:
    description = f"Your content has {_plural(total, 'image')}"
    if total == 0:
        return make_check("images", status="warning", score=3, description=description,
                          suggestion="Add images to make your content more engaging")
    return passed("images", description)


def _image_alt(total: int, with_alt: int) -> Optional[Check]:
    if total == 0:
        return None
    description = f"{with_alt} of {total} images have alt tags"
    if with_alt == total:
        return passed("image-alt", description)
    # round half up: 8 * with_alt / total
    full = max_score("image-alt")
    score = (2 * full * with_alt + total) // (2 * total)
    return make_check("image-alt", status="warning" if with_alt else "fail", score=score,
                      description=description,
                      suggestion="Add descriptive alt tags to all images for accessibility and SEO")


def _internal_links(internal: int) -> Check:
    description = f"Your content has {_plural(internal, 'internal link')}"
    if internal > 0:
        return passed("internal-links", description)
    return make_check("internal-links", status="warning", score=2, description=description,
                      suggestion="Add internal links to other relevant pages on your site")


def _featured_image(image: Optional[FeaturedImage]) -> Check:
    if image is not None and image.url:
        return passed("featured-image", "Featured image is set")
    return make_check("featured-image", status="warning", score=2,
                      description="No featured image set",
                      suggestion="Add a featured image for better social sharing")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def analyze_content_structure(
    *,
    title: str,
    meta_description: str,
    doc: NormalizedContent,
    primary_keyword: str,
    featured_image: Optional[FeaturedImage] = None,
) -> ContentResult:
    headings = extract_headings(doc)
    images_total, images_with_alt = count_images(doc)
    internal, external = count_links(doc)

    checks = CheckList()
    checks.emit(_title_length(title))
    checks.emit(_title_keyword(title, primary_keyword))
    checks.emit(_meta_length(meta_description))
    checks.emit(_meta_keyword(meta_description, primary_keyword))
    checks.emit(_h1(headings))
    checks.emit(_h2(headings))
    checks.emit(_images(images_total))
    checks.emit(_image_alt(images_total, images_with_alt))
    checks.emit(_internal_links(internal))
    checks.emit(_featured_image(featured_image))

    return ContentResult(
        title_length=len(title),
        meta_description_length=len(meta_description),
        headings=headings,
        image_count=images_total,
        images_with_alt=images_with_alt,
        internal_links=internal,
        external_links=external,
        checks=checks.freeze(),
    )
