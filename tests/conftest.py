import textwrap
from pathlib import Path

import pytest

from dailyposts.services.content_parser import RawDocument, split_documents


def md(raw: str) -> str:
    """Dedent an inline markdown fixture so front matter starts at column 0."""
    return textwrap.dedent(raw).lstrip()


def make_docs(raw: str, path: str = "content/posts/example.md") -> list[RawDocument]:
    parts = split_documents(md(raw))
    return [
        RawDocument(path=Path(path), index=i, text=part, total=len(parts))
        for i, part in enumerate(parts)
    ]


def make_doc(raw: str, path: str = "content/posts/example.md") -> RawDocument:
    return make_docs(raw, path)[0]


class FakeRepo:
    """
    Minimal repo stand-in used in service tests.
    """

    def __init__(self, docs: list[RawDocument]):
        self.docs = docs
        self.calls = []

    def list_documents(self):
        self.calls.append("list_documents")
        return list(self.docs)

    def get_documents(self, slug: str):
        self.calls.append(f"get_documents({slug})")
        return list(self.docs)


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(self, list_posts_return=None, get_post_return=None, details=None):
        self._list_posts_return = list_posts_return or []
        self._get_post_return = get_post_return
        self._details = details or []

    def list_posts(self):
        return self._list_posts_return

    def list_post_details(self):
        return self._details

    def featured_posts(self):
        return [p for p in self._list_posts_return if p.get("featured")]

    def get_post(self, slug: str):
        return self._get_post_return

    def posts_by_category(self, slug: str):
        return self._list_posts_return

    def posts_by_tag(self, tag_slug: str):
        return self._list_posts_return

    def posts_by_author(self, slug: str):
        return self._list_posts_return


DOCKER_POST = """
---
title: How to Run Docker Without Sudo
excerpt: Add your user to the docker group.
category:
  name: Docker
  slug: docker
date: '2024-03-01T09:00:00Z'
publishedAt: '2024-03-01T09:00:00Z'
updatedAt: '2024-03-05T12:00:00Z'
readingTime: 4 min read
author:
  name: DevOps Daily Team
  slug: devops-daily-team
tags:
  - Docker
  - Linux
featured: true
---

## Fix the permissions

```bash
sudo usermod -aG docker $USER
```
"""

TERRAFORM_POST = """
---
title: Terraform Count vs For Each
excerpt: When to use which.
category:
  name: Terraform
  slug: terraform
date: '2024-01-10T08:00:00Z'
publishedAt: '2024-01-10T08:00:00Z'
updatedAt: '2024-01-10T08:00:00Z'
readingTime: 6 min read
author:
  name: DevOps Daily Team
  slug: devops-daily-team
tags:
  - terraform
  - docker
---

```hcl
resource "aws_instance" "web" {
  count = 2
}
```
"""

GIT_POST = """
---
title: Fixing src refspec master does not match any
excerpt: Push to the branch that exists.
category:
  name: Git
  slug: git
date: '2023-11-20T10:00:00Z'
publishedAt: '2023-11-20T10:00:00Z'
updatedAt: '2023-11-21T10:00:00Z'
readingTime: 3 min read
author:
  name: DevOps Daily Team
  slug: devops-daily-team
tags:
  - Git
---

Run `git branch` to see which branch you are on.
"""


@pytest.fixture
def content_dir(tmp_path):
    """A content tree with two single-post files and one aggregated file."""
    posts = tmp_path / "content" / "posts"
    posts.mkdir(parents=True)
    (posts / "docker-without-sudo.md").write_text(md(DOCKER_POST), encoding="utf-8")
    (posts / "terraform-count-vs-for-each.md").write_text(
        md(TERRAFORM_POST), encoding="utf-8"
    )
    aggregated = (
        md(GIT_POST)
        + "\n<|RELATED_DOC_SEP-magic-5f1c|>\n"
        + md(TERRAFORM_POST).replace(
            "Terraform Count vs For Each", "Terraform Workspaces Explained"
        )
    )
    (posts / "git-refspec.md").write_text(aggregated, encoding="utf-8")
    (posts / "notes.txt").write_text("not a post", encoding="utf-8")

    categories = tmp_path / "content" / "categories"
    categories.mkdir()
    (categories / "docker.md").write_text(
        md(
            """
            ---
            name: Docker
            description: Containers from build to runtime.
            ---
            """
        ),
        encoding="utf-8",
    )
    (categories / "kubernetes.md").write_text(
        md(
            """
            ---
            name: Kubernetes
            description: Orchestration.
            ---
            """
        ),
        encoding="utf-8",
    )

    authors = tmp_path / "content" / "authors"
    authors.mkdir()
    (authors / "devops-daily-team.md").write_text(
        md(
            """
            ---
            name: DevOps Daily Team
            bio: Practical DevOps guides.
            ---
            """
        ),
        encoding="utf-8",
    )
    return tmp_path / "content"
