from dailyposts.repos.posts_repo import FilesystemPostsRepo


def test_list_post_files_only_markdown_sorted(content_dir):
    repo = FilesystemPostsRepo(content_dir / "posts")

    assert [p.name for p in repo.list_post_files()] == [
        "docker-without-sudo.md",
        "git-refspec.md",
        "terraform-count-vs-for-each.md",
    ]


def test_list_documents_splits_aggregated_files(content_dir):
    repo = FilesystemPostsRepo(content_dir / "posts")

    docs = repo.list_documents()

    assert len(docs) == 4
    assert [d.index for d in docs if d.path.name == "git-refspec.md"] == [0, 1]


def test_missing_posts_dir_returns_empty(tmp_path):
    repo = FilesystemPostsRepo(tmp_path / "absent")

    assert repo.list_post_files() == []
    assert repo.list_documents() == []


def test_get_documents_reads_matching_file_directly(content_dir):
    repo = FilesystemPostsRepo(content_dir / "posts")

    docs = repo.get_documents("docker-without-sudo")

    assert len(docs) == 1
    assert docs[0].path.name == "docker-without-sudo.md"


def test_get_documents_falls_back_to_all_documents(content_dir):
    repo = FilesystemPostsRepo(content_dir / "posts")

    assert len(repo.get_documents("terraform-workspaces-explained")) == 4


def test_get_documents_does_not_escape_posts_dir(content_dir):
    (content_dir / "secret.md").write_text("---\ntitle: x\n---\nx\n", encoding="utf-8")
    repo = FilesystemPostsRepo(content_dir / "posts")

    docs = repo.get_documents("../secret")

    assert all(d.path.parent == content_dir / "posts" for d in docs)
