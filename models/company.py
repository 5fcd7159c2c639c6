from sqlalchemy import Column, Integer, String, Text, Boolean, Index
from models.base import Base, TimestampMixin


class Client(Base, TimestampMixin):
    """Client company, one per discovered logo"""
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_name = Column(String(300), nullable=False, unique=True)
    industry = Column(String(200), nullable=True)
    project_type = Column(String(200), nullable=True)
    testimonial = Column(Text, nullable=True)
    logo_url = Column(String(1024), nullable=True)
    website_url = Column(String(1024), nullable=True)
    partnership_since = Column(String(16), nullable=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_clients_active", "is_active"),
    )


class Approval(Base, TimestampMixin):
    """
    Government approval authority.

    issue_date and expiry_date are ISO (YYYY-MM-DD) strings when present.
    """
    __tablename__ = "approvals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    authority_name = Column(String(300), nullable=False, unique=True)
    approval_type = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)
    logo_url = Column(String(1024), nullable=True)
    certificate_number = Column(String(100), nullable=True)
    issue_date = Column(String(10), nullable=True)
    expiry_date = Column(String(10), nullable=True)
    validity_period = Column(String(100), nullable=True)
    certificate_url = Column(String(1024), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_approvals_active", "is_active"),
    )


class CompanyInfo(Base, TimestampMixin):
    """Key/value company profile field"""
    __tablename__ = "company_info"

    id = Column(Integer, primary_key=True, autoincrement=True)
    field_name = Column(String(100), nullable=False, unique=True)
    field_value = Column(Text, nullable=True)
    field_type = Column(String(20), nullable=False, default="text")
    category = Column(String(50), nullable=False, default="general")

    __table_args__ = (
        Index("idx_company_info_category", "category"),
    )
