from __future__ import annotations

from django.db import models


class Category(models.Model):
    slug = models.SlugField(unique=True, db_index=True)
    name = models.CharField(max_length=80, unique=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.name


class Post(models.Model):
    """Catalog row for one post file. The file stays the source of truth."""

    slug = models.SlugField(max_length=200, unique=True, db_index=True)
    title = models.CharField(max_length=240)
    layout = models.CharField(max_length=80, blank=True)
    date = models.DateTimeField(db_index=True)
    excerpt = models.TextField(blank=True)
    body = models.TextField()
    source_path = models.CharField(max_length=500)

    content_hash = models.CharField(max_length=64, db_index=True)
    version = models.IntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    categories = models.ManyToManyField(Category, related_name="posts", blank=True)

    class Meta:
        ordering = ["-date", "-id"]

    def __str__(self) -> str:
        return self.title
