"""
Factory for household appliances.
"""
from decimal import Decimal

from app.database.schemas import ApplianceDBModel
from app.test.factory.base_factory import AsyncSQLAlchemyFactory
from app.test.factory.create_async_session import async_session


class ApplianceFactory(AsyncSQLAlchemyFactory):
    class Meta:
        model = ApplianceDBModel
        sqlalchemy_session = async_session

    user_id = None
    type = "Refrigerator"
    model_name = "CoolMax 300"
    age_years = 4
    energy_star_rating = "A++"
    power_consumption_watts = Decimal("150.00")
    average_daily_usage_hours = Decimal("24.00")
