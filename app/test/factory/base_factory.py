"""
Base factory for async SQLAlchemy models following kkb_fastapi pattern.
"""
import asyncio
import inspect
from typing import Any

import factory
from factory.alchemy import SQLAlchemyOptions


class AsyncSQLAlchemyFactory(factory.Factory):
    """
    Base factory for creating async SQLAlchemy model instances.

    Usage:
        user = await UserFactory(email="a@example.com")
        readings = await MeterReadingFactory.create_batch(3, user_id=user.id)
    """

    _options_class = SQLAlchemyOptions

    class Meta:
        abstract = True

    @classmethod
    async def create(cls, **kwargs) -> Any:
        """Build, persist and return one instance."""
        return await super().create(**kwargs)

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """
        Create instance and return as Task.

        A Task can be awaited more than once, unlike a bare coroutine.
        """
        async def maker_coroutine():
            for key, value in kwargs.items():
                # SubFactory values arrive as Tasks; resolve them to instances
                if inspect.isawaitable(value):
                    kwargs[key] = await value
            return await cls._save(model_class, *args, **kwargs)

        return asyncio.create_task(maker_coroutine())

    @classmethod
    async def _save(cls, model_class, *args, **kwargs) -> Any:
        async with cls._meta.sqlalchemy_session() as session:
            obj = model_class(*args, **kwargs)
            session.add(obj)
            await session.commit()
            return obj

    @classmethod
    async def create_batch(cls, size: int, **kwargs) -> list[Any]:
        return [await cls.create(**kwargs) for _ in range(size)]
