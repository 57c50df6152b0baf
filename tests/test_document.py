from bs4 import BeautifulSoup

from imagecaption.config import CaptionConfig
from imagecaption.document import caption_html, caption_soup, select_targets

PAGE = """
<div class="foobar">
  <p class="p-foo"><a href="/foo/"><img class="image-foo" title="Foo" src="/foo.jpg"/></a></p>
  <p><img src="/plain.jpg"/></p>
</div>
<aside><img title="Outside" src="/out.jpg"/></aside>
"""


def test_caption_html_default_selector():
    html = caption_html(PAGE)
    soup = BeautifulSoup(html, "html.parser")

    captions = [tag.get_text() for tag in soup.select(".re-imagecaption-caption")]
    assert captions == ["Foo", "Outside"]
    assert soup.find("img", src="/plain.jpg").parent.name == "p"


def test_caption_html_scoped_selector():
    html = caption_html(PAGE, selector=".foobar img")
    soup = BeautifulSoup(html, "html.parser")

    captions = [tag.get_text() for tag in soup.select(".re-imagecaption-caption")]
    assert captions == ["Foo"]
    assert soup.find("aside").find("span") is None


def test_caption_soup_returns_report():
    soup = BeautifulSoup(PAGE, "html.parser")
    report = caption_soup(soup, config=CaptionConfig(collapse_parent=True))

    assert (report.processed, report.transformed, report.skipped) == (3, 2, 1)
    assert soup.find("p", class_="p-foo") is None
    wrapper = soup.select_one(".re-imagecaption-wrapper")
    assert wrapper["class"] == ["re-imagecaption-wrapper", "image-foo", "p-foo"]


def test_select_targets_is_a_snapshot():
    soup = BeautifulSoup(PAGE, "html.parser")
    targets = select_targets(soup)

    caption_soup(soup)

    assert [img["src"] for img in targets] == ["/foo.jpg", "/plain.jpg", "/out.jpg"]


def test_caption_html_without_images_is_unchanged():
    html = '<p class="x">No pictures &amp; no captions</p>'
    assert caption_html(html) == html
