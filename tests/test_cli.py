import io

import pytest
from bs4 import BeautifulSoup

from imagecaption import cli
from imagecaption.config import ElementRecipe

PAGE = '<p class="p-foo"><a href="/foo/"><img class="image-foo" title="Foo" width="80"/></a></p>'


def _run(argv, html=PAGE):
    args = cli.parse_args(argv)
    stdout = io.StringIO()
    count = cli.run(args, io.StringIO(html), stdout)
    return count, BeautifulSoup(stdout.getvalue(), "html.parser")


def test_defaults():
    count, soup = _run([])

    assert count == 1
    wrapper = soup.select_one("p.p-foo > span.re-imagecaption-wrapper")
    assert wrapper["class"] == ["re-imagecaption-wrapper", "image-foo"]
    assert "style" not in wrapper.attrs


def test_width_aware_variant():
    _, soup = _run(["--variant", "width-aware"])
    assert soup.select_one(".re-imagecaption-wrapper")["style"] == "width: 80px"


def test_collapsing_variant_with_recipe_overrides():
    _, soup = _run(
        ["--variant", "collapsing", "--container", "figure.photo", "--caption-wrapper", "figcaption"]
    )

    assert soup.find("p") is None
    figure = soup.find("figure")
    assert figure["class"] == ["photo", "image-foo", "p-foo"]
    assert figure.find("div", class_="re-imagecaption-image").find("a")["href"] == "/foo/"
    assert figure.find("figcaption").string == "Foo"


def test_selector_limits_targets():
    count, soup = _run(["--selector", "aside img"])
    assert count == 0
    assert soup.find("span") is None


def test_recipe_arguments_are_parsed():
    args = cli.parse_args(["--image-wrapper", '<em class="pic" />'])
    assert args.image_wrapper == ElementRecipe("em", ("pic",))
    assert cli.build_config(args).image_wrapper == ElementRecipe("em", ("pic",))


def test_invalid_variant_exits():
    with pytest.raises(SystemExit):
        cli.parse_args(["--variant", "fancy"])


def test_main_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(PAGE))
    cli.main([])

    out = capsys.readouterr().out
    assert "re-imagecaption-caption" in out
