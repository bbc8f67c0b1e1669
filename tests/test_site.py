from portfolio.cli import main
from portfolio.content_store import ContentStore
from portfolio.scheduler import ManualScheduler
from portfolio.site import open_site


def test_open_site_renders_and_starts_background(data_dir):
    sched = ManualScheduler()
    site = open_site(str(data_dir), scheduler=sched, with_background=True)
    assert site.document.lang == "fa"
    assert site.background is not None and site.background.running
    assert site.typing.running
    sched.advance(32)
    assert site.background.frames == 3

    site.close()
    assert not site.background.running
    assert not site.typing.running
    assert sched.pending == 0


def test_open_site_without_canvas_mount(content):
    site = open_site(
        content=content,
        skeleton='<html><body><p id="about-text"></p></body></html>',
        with_background=True,
    )
    assert site.background is None
    assert site.document.text("about-text") == content.profile["about_fa"]


def test_open_site_with_nothing_loaded():
    site = open_site(content=ContentStore(), with_background=False)
    assert site.document.text("hero-name") == ""
    assert "hidden" in site.document.classes("hero-status")
    assert site.document.text("footer-text")


def test_cli_page(data_dir, tmp_path):
    out = tmp_path / "preview.html"
    assert main(["page", "--data", str(data_dir), "--lang", "en", "-o", str(out)]) == 0
    html = out.read_text(encoding="utf-8")
    assert 'lang="en"' in html
    assert 'dir="ltr"' in html
    assert "Sara Ahmadi" in html
    assert "Shop Engine" in html


def test_cli_resume(data_dir, tmp_path):
    out = tmp_path / "resume.html"
    assert main(["resume", "--data", str(data_dir), "-o", str(out)]) == 0
    assert "سارا احمدی" in out.read_text(encoding="utf-8")


def test_cli_background_frames(tmp_path):
    out_dir = tmp_path / "frames"
    assert main(["background", "--width", "64", "--height", "48", "--frames", "3", "--seed", "1", "--out", str(out_dir)]) == 0
    assert sorted(p.name for p in out_dir.iterdir()) == ["frame_0001.png", "frame_0002.png", "frame_0003.png"]
