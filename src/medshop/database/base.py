"""
Declarative base and shared column types for the storefront models.

Constraint names follow the ones already present in the SQL Server schema
(PK_Users, FK_Orders_Users_UserId, IX_Orders_UserId, ...), so metadata created
locally lines up with the production database.
"""

from sqlalchemy import MetaData, Numeric
from sqlalchemy.dialects import mssql
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "IX_%(table_name)s_%(column_0_name)s",
    "uq": "UQ_%(table_name)s_%(column_0_name)s",
    "ck": "CK_%(table_name)s_%(constraint_name)s",
    "fk": "FK_%(table_name)s_%(referred_table_name)s_%(column_0_name)s",
    "pk": "PK_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


# Currency columns: exact decimals everywhere, native MONEY on SQL Server.
Money = Numeric(19, 4, asdecimal=True).with_variant(mssql.MONEY(), "mssql")
