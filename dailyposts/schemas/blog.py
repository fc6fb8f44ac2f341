from typing import List, Optional

from pydantic import BaseModel, Field


class CategoryRef(BaseModel):
    name: str
    slug: str


class AuthorRef(BaseModel):
    name: str
    slug: str


class PostSummary(BaseModel):
    id: str
    slug: str
    title: str
    excerpt: Optional[str] = None
    category: Optional[CategoryRef] = None
    author: Optional[AuthorRef] = None
    date: Optional[str] = None
    publishedAt: Optional[str] = None
    updatedAt: Optional[str] = None
    readingTime: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    featured: bool = False


class PostDetail(PostSummary):
    content: str
    html: str = ""


class Tag(BaseModel):
    name: str
    slug: str
    count: int = 0


class Category(BaseModel):
    name: str
    slug: str
    description: Optional[str] = None
    longDescription: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    count: int = 0


class Author(BaseModel):
    name: str
    slug: str
    bio: Optional[str] = None
    avatar: Optional[str] = None
    postCount: int = 0


class TagPosts(BaseModel):
    tag: Tag
    posts: List[PostSummary] = Field(default_factory=list)


class CategoryPosts(BaseModel):
    category: Category
    posts: List[PostSummary] = Field(default_factory=list)


class AuthorPosts(BaseModel):
    author: Author
    posts: List[PostSummary] = Field(default_factory=list)
