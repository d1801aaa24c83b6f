# -*- coding: utf-8 -*-
"""Tortoise ORM models used by relation sync tests."""

from __future__ import annotations

from tortoise import fields
from tortoise.models import Model


class Tag(Model):
    """Related model listed as options."""

    id = fields.IntField(pk=True)
    name = fields.CharField(max_length=50)


class Article(Model):
    """Owner of the many-to-many relation managed by the field."""

    id = fields.IntField(pk=True)
    title = fields.CharField(max_length=100)
    colors = fields.TextField(null=True)
    tags: fields.ManyToManyRelation[Tag] = fields.ManyToManyField(
        "models.Tag", related_name="articles"
    )
    authors: fields.ReverseRelation["Author"]


class Author(Model):
    """Reverse foreign key that must not be accepted as a many-to-many."""

    id = fields.IntField(pk=True)
    name = fields.CharField(max_length=50)
    article: fields.ForeignKeyRelation[Article] = fields.ForeignKeyField(
        "models.Article", related_name="authors"
    )


__all__ = ["Article", "Author", "Tag"]


# The End
