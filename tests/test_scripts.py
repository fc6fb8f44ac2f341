from dailyposts.services.content_parser import ContentParser
from scripts.lint_posts import main as lint_main
from scripts.split_posts import main as split_main
from scripts.split_posts import split_file
from tests.conftest import GIT_POST, md


def test_split_file_writes_one_file_per_post(content_dir, tmp_path):
    out = tmp_path / "out"
    out.mkdir()

    written = split_file(content_dir / "posts" / "git-refspec.md", out, ContentParser())

    assert written == 2
    assert sorted(p.name for p in out.iterdir()) == [
        "git-refspec.md",
        "terraform-workspaces-explained.md",
    ]
    assert (out / "git-refspec.md").read_text(encoding="utf-8").startswith("---\ntitle:")


def test_split_file_does_not_overwrite(content_dir, tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    (out / "git-refspec.md").write_text("keep me", encoding="utf-8")

    written = split_file(content_dir / "posts" / "git-refspec.md", out, ContentParser())

    assert written == 1
    assert (out / "git-refspec.md").read_text(encoding="utf-8") == "keep me"


def test_split_main_creates_output_dir(content_dir, tmp_path):
    out = tmp_path / "exploded"

    code = split_main([str(content_dir / "posts" / "git-refspec.md"), "--out", str(out)])

    assert code == 0
    assert len(list(out.glob("*.md"))) == 2


def test_split_main_keeps_writes_inside_out_dir(tmp_path):
    src = tmp_path / "src" / "aggregated.md"
    src.parent.mkdir()
    escaping = md(GIT_POST).replace("title:", "slug: ../escaped\ntitle:", 1)
    src.write_text(
        md(GIT_POST) + "\n<|RELATED_DOC_SEP-magic-1|>\n" + escaping, encoding="utf-8"
    )
    out = tmp_path / "nested" / "out"

    code = split_main([str(src), "--out", str(out)])

    assert code == 0
    assert [p.name for p in out.iterdir()] == ["aggregated.md"]
    assert not (out.parent / "escaped.md").exists()
    assert not (tmp_path / "escaped.md").exists()


def test_lint_main_exit_codes(content_dir, tmp_path, capsys):
    assert lint_main([str(content_dir / "posts")]) == 0

    bad = tmp_path / "bad-post.md"
    bad.write_text(md(GIT_POST).replace("title:", "heading:"), encoding="utf-8")
    assert lint_main([str(bad)]) == 1

    out = capsys.readouterr().out
    assert "[required-keys] missing keys: title" in out
