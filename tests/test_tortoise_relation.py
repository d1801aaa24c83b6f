# -*- coding: utf-8 -*-
"""
test_tortoise_relation

Sync many-to-many relations through Tortoise ORM post-save signals.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import pytest
from tortoise import Tortoise

from multiselect_field import (
    FieldRequest,
    Multiselect,
    OptionsCache,
    RelationCapabilityError,
    RelationNotFoundError,
)
from multiselect_field.adapters import TortoiseManyToManyAssociation
from multiselect_field.adapters import tortoise as tortoise_adapter
from multiselect_field.core.relations import resolve_association

from .tortoise_models import Article, Author, Tag


@asynccontextmanager
async def database() -> AsyncIterator[list[Tag]]:
    """Initialize an in-memory database seeded with four tags."""

    await Tortoise.init(
        db_url="sqlite://:memory:",
        modules={"models": ["tests.tortoise_models"]},
    )
    await Tortoise.generate_schemas()
    try:
        tags = [await Tag.create(name=name) for name in ("red", "green", "blue", "black")]
        yield tags
    finally:
        await Tortoise.close_connections()


async def _member_ids(article: Article) -> set[int]:
    return {tag.id for tag in await article.tags.all()}


class TestTortoiseRelation:
    """Verify sync and resolution against a real database."""

    @pytest.mark.asyncio
    async def test_sync_reconciles_members(self) -> None:
        async with database() as tags:
            article = await Article.create(title="Palette")
            await article.tags.add(tags[0], tags[1], tags[2])
            ids = [tag.id for tag in tags]

            association = TortoiseManyToManyAssociation(article.tags)
            await association.sync([ids[1], str(ids[3])])

            assert await _member_ids(article) == {ids[1], ids[3]}

    @pytest.mark.asyncio
    async def test_sync_skips_keys_of_the_wrong_type(self) -> None:
        async with database() as tags:
            article = await Article.create(title="Palette")
            await article.tags.add(tags[0])

            association = TortoiseManyToManyAssociation(article.tags)
            await association.sync(["abc", tags[1].id])

            assert await _member_ids(article) == {tags[1].id}

    @pytest.mark.asyncio
    async def test_failing_hook_does_not_drop_later_hooks(self) -> None:
        """Ensure every queued hook runs and the first failure is raised."""

        async with database():
            article = await Article.create(title="Palette")
            ran: list[str] = []

            def _broken(instance: Article) -> None:
                ran.append("broken")
                raise RuntimeError("boom")

            async def _healthy(instance: Article) -> None:
                ran.append("healthy")

            tortoise_adapter.on_saved(article, _broken)
            tortoise_adapter.on_saved(article, _healthy)

            with pytest.raises(RuntimeError, match="boom"):
                await article.save()
            assert ran == ["broken", "healthy"]

            await article.save()
            assert ran == ["broken", "healthy"]

    @pytest.mark.asyncio
    async def test_save_runs_sync_from_request(self) -> None:
        """Ensure filling stages a hook that runs after ``save``."""

        async with database() as tags:
            article = await Article.create(title="Palette")
            await article.tags.add(tags[0], tags[1], tags[2])
            field = Multiselect("tags").belongs_to_many(Tag, "name", cache=OptionsCache())

            field.fill(FieldRequest({"tags": [tags[1].id, tags[3].id]}), article)
            assert await _member_ids(article) == {tags[0].id, tags[1].id, tags[2].id}

            await article.save()
            assert await _member_ids(article) == {tags[1].id, tags[3].id}

            article.title = "Renamed"
            await article.save()
            assert await _member_ids(article) == {tags[1].id, tags[3].id}

    @pytest.mark.asyncio
    async def test_new_instance_is_synced_after_create(self) -> None:
        async with database() as tags:
            article = Article(title="Draft")
            field = Multiselect("tags").belongs_to_many(Tag, "name", cache=OptionsCache())

            field.fill(FieldRequest({"tags": [tags[0].id]}), article)
            await article.save()

            assert await _member_ids(article) == {tags[0].id}

    @pytest.mark.asyncio
    async def test_prefetch_and_resolve(self) -> None:
        """Check options come from the related table and values are keys."""

        async with database() as tags:
            article = await Article.create(title="Palette")
            await article.tags.add(tags[2], tags[0])
            field = Multiselect("tags").belongs_to_many(Tag, "name", cache=OptionsCache())

            value = await field.resolve_for_display(article)

            assert sorted(value) == sorted([tags[0].id, tags[2].id])
            assert field.meta["options"] == [
                {"label": tag.name, "value": tag.id} for tag in tags
            ]

    @pytest.mark.asyncio
    async def test_plain_field_is_not_a_relation(self) -> None:
        async with database():
            article = await Article.create(title="Palette")
            field = Multiselect("title").belongs_to_many(Tag, cache=OptionsCache())

            field.fill(FieldRequest({"title": [1]}), article)

            with pytest.raises(RelationNotFoundError):
                await article.save()

    @pytest.mark.asyncio
    async def test_reverse_foreign_key_cannot_sync(self) -> None:
        async with database():
            article = await Article.create(title="Palette")
            await Author.create(name="Ann", article=article)

            with pytest.raises(RelationCapabilityError):
                resolve_association(article, "authors")

    @pytest.mark.asyncio
    async def test_plain_json_column_round_trip(self) -> None:
        async with database():
            article = await Article.create(title="Palette")
            field = Multiselect("colors").options({10: "Red", 20: "Blue"})

            field.fill(FieldRequest({"colors": [10, 20]}), article)
            await article.save()
            stored = await Article.get(id=article.id)

            assert stored.colors == "[10, 20]"
            assert field.resolve(stored) == [10, 20]


# The End
