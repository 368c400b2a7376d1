from __future__ import annotations

from datetime import date
from threading import Lock

import structlog

from app.models.schemas import Article
from app.services.listing import search_articles


EXCERPT_LENGTH = 150

logger = structlog.get_logger(__name__)


_SAMPLE_ARTICLES: list[dict] = [
    {
        "id": 1,
        "title": "Introduction to React Hooks",
        "content": (
            "React Hooks are functions that let you use state and other React features without writing a class. "
            "This comprehensive guide covers useState, useEffect, and custom hooks. useState is the most basic hook "
            "that allows you to add state to functional components. useEffect lets you perform side effects in "
            "function components, replacing lifecycle methods like componentDidMount and componentWillUnmount. "
            "Custom hooks enable you to extract component logic into reusable functions that can be shared across "
            "multiple components."
        ),
        "author": "John Doe",
        "published_at": "2023-09-15",
        "tags": ["react", "hooks", "javascript", "frontend"],
        "excerpt": (
            "A comprehensive guide to React Hooks covering useState, useEffect, and custom hooks for modern React "
            "development."
        ),
    },
    {
        "id": 2,
        "title": "Building REST APIs with Node.js",
        "content": (
            "Learn how to create robust REST APIs using Node.js and Express. This tutorial covers routing, "
            "middleware, database integration, and best practices. We'll start with setting up a basic Express "
            "server, then move on to creating routes for different HTTP methods. Middleware functions are essential "
            "for handling authentication, logging, and error handling. Database integration using ORMs like "
            "Sequelize or TypeORM makes data management much easier."
        ),
        "author": "Jane Smith",
        "published_at": "2023-09-20",
        "tags": ["nodejs", "express", "api", "backend"],
        "excerpt": (
            "Complete tutorial on creating robust REST APIs with Node.js, Express, middleware, and database "
            "integration."
        ),
    },
    {
        "id": 3,
        "title": "TypeScript Best Practices",
        "content": (
            "TypeScript enhances JavaScript by adding static types. Discover best practices for type definitions, "
            "interfaces, generics, and advanced typing techniques. Start with basic type annotations for variables "
            "and function parameters. Interfaces help define the shape of objects and can be extended for more "
            "complex scenarios. Generics provide type safety while maintaining flexibility. Advanced types like "
            "conditional types and mapped types enable powerful type transformations."
        ),
        "author": "Mike Johnson",
        "published_at": "2023-09-25",
        "tags": ["typescript", "javascript", "types", "development"],
        "excerpt": "Essential TypeScript best practices including interfaces, generics, and advanced typing techniques.",
    },
    {
        "id": 4,
        "title": "CSS Grid vs Flexbox",
        "content": (
            "Understanding when to use CSS Grid versus Flexbox can make your layouts more efficient. This article "
            "compares both layout systems with practical examples. Flexbox is designed for one-dimensional layouts, "
            "perfect for navigation bars, button groups, and centering content. CSS Grid excels at two-dimensional "
            "layouts, ideal for page layouts, card grids, and complex responsive designs. Often, the best approach "
            "is to use both together."
        ),
        "author": "Sarah Wilson",
        "published_at": "2023-10-01",
        "tags": ["css", "layout", "grid", "flexbox", "frontend"],
        "excerpt": "Comprehensive comparison of CSS Grid and Flexbox with practical examples and use cases.",
    },
    {
        "id": 5,
        "title": "Database Optimization Techniques",
        "content": (
            "Improve your database performance with indexing strategies, query optimization, and proper schema "
            "design. Learn about SQL optimization and NoSQL best practices. Proper indexing can dramatically improve "
            "query performance, but over-indexing can slow down writes. Query optimization involves analyzing "
            "execution plans and rewriting inefficient queries. Schema design should consider normalization vs "
            "denormalization tradeoffs based on your application's read/write patterns."
        ),
        "author": "David Brown",
        "published_at": "2023-10-05",
        "tags": ["database", "sql", "optimization", "performance", "backend"],
        "excerpt": "Essential database optimization techniques covering indexing, query optimization, and schema design.",
    },
    {
        "id": 6,
        "title": "Modern JavaScript ES2024 Features",
        "content": (
            "Explore the latest JavaScript features introduced in ES2024. This includes new array methods, improved "
            "async operations, and enhanced object manipulation. The new array methods like groupBy() and "
            "toReversed() provide more functional programming options. Promise.withResolvers() offers better control "
            "over promise creation. The pipeline operator (when available) will revolutionize function composition."
        ),
        "author": "Alex Chen",
        "published_at": "2024-01-15",
        "tags": ["javascript", "es2024", "features", "frontend"],
        "excerpt": "Latest JavaScript ES2024 features including new array methods and async improvements.",
    },
    {
        "id": 7,
        "title": "Microservices Architecture Patterns",
        "content": (
            "Learn essential patterns for building scalable microservices. This guide covers service discovery, API "
            "gateways, circuit breakers, and distributed data management. Service discovery helps services find and "
            "communicate with each other dynamically. API gateways provide a single entry point and handle "
            "cross-cutting concerns. Circuit breakers prevent cascade failures by failing fast when downstream "
            "services are unavailable."
        ),
        "author": "Lisa Rodriguez",
        "published_at": "2024-02-10",
        "tags": ["microservices", "architecture", "patterns", "scalability", "backend"],
        "excerpt": "Essential microservices patterns for building scalable distributed systems.",
    },
    {
        "id": 8,
        "title": "React Performance Optimization",
        "content": (
            "Optimize your React applications for better performance. Learn about memoization, code splitting, lazy "
            "loading, and the React Profiler. React.memo prevents unnecessary re-renders of functional components. "
            "useMemo and useCallback memoize expensive computations and function references. Code splitting with "
            "React.lazy and Suspense reduces initial bundle size. The React Profiler helps identify performance "
            "bottlenecks."
        ),
        "author": "Tom Anderson",
        "published_at": "2024-03-05",
        "tags": ["react", "performance", "optimization", "frontend"],
        "excerpt": "Complete guide to React performance optimization techniques and best practices.",
    },
]


def make_excerpt(content: str) -> str:
    if len(content) > EXCERPT_LENGTH:
        return content[:EXCERPT_LENGTH] + "..."
    return content


class ArticleStore:
    """In-memory article list. Insert-only; newest articles come first."""

    def __init__(self, articles: list[Article] | None = None) -> None:
        self._lock = Lock()
        self._articles: list[Article] = list(articles) if articles is not None else sample_articles()

    def list_articles(self, search: str | None = None) -> list[Article]:
        with self._lock:
            snapshot = list(self._articles)
        return search_articles(snapshot, search)

    def get(self, article_id: int) -> Article | None:
        with self._lock:
            return next((a for a in self._articles if a.id == article_id), None)

    def create(self, title: str, content: str, author: str, tags: list[str] | None = None) -> Article:
        with self._lock:
            new_id = max((a.id for a in self._articles), default=0) + 1
            article = Article(
                id=new_id,
                title=title,
                content=content,
                author=author,
                published_at=date.today().isoformat(),
                tags=list(tags or []),
                excerpt=make_excerpt(content),
            )
            self._articles.insert(0, article)

        logger.info("article_created", article_id=new_id)
        return article

    def reset(self) -> None:
        with self._lock:
            self._articles = sample_articles()


def sample_articles() -> list[Article]:
    return [Article(**row) for row in _SAMPLE_ARTICLES]


_STORE = ArticleStore()


def get_article_store() -> ArticleStore:
    return _STORE


def reset_article_store() -> None:
    """Restore the seeded articles (used by tests)."""

    _STORE.reset()
