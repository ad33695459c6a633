# stockwatch/models/units.py

from sqlalchemy import Column, Integer, String

from stockwatch.database import Base


class UnitOfMeasure(Base):
    __tablename__ = "units_of_measure"

    id = Column(Integer, primary_key=True, index=True)
    unit = Column(String, unique=True, nullable=False)
    abbreviation = Column(String, unique=True, index=True, nullable=False)
