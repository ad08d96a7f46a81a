from sqlalchemy import Column, Integer, String, Table, ForeignKey
from sqlalchemy.orm import relationship
from jobsolution.config.database import Base

DEFAULT_INDUSTRY_COLOR = "#6b7280"

company_industries = Table(
    "company_industries",
    Base.metadata,
    Column("company_id", Integer, ForeignKey("companies.id", ondelete="CASCADE"), primary_key=True),
    Column("industry_id", Integer, ForeignKey("industries.id"), primary_key=True),
)


class Industry(Base):
    __tablename__ = "industries"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    color = Column(String(20), nullable=False, default=DEFAULT_INDUSTRY_COLOR)

    companies = relationship("Company", secondary=company_industries, back_populates="industries")
