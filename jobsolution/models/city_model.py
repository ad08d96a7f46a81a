from sqlalchemy import Column, Integer, String, UniqueConstraint
from jobsolution.config.database import Base


class City(Base):
    __tablename__ = "cities"
    __table_args__ = (UniqueConstraint("name", "region", "country", name="uq_cities_name_region_country"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    region = Column(String(100), nullable=False, default="")
    country = Column(String(100), nullable=False)
