from sqlalchemy import Column, Integer, String, Text, Boolean, Float, ForeignKey, Index
from models.base import Base, TimestampMixin


class ProductCategory(Base, TimestampMixin):
    """
    Product category, keyed by a slug.

    sort_order is display ordering only. Products reference categories by
    id without a schema-level constraint; dangling references are caught
    by the validator.
    """
    __tablename__ = "product_categories"

    id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)


class Product(Base, TimestampMixin):
    """
    Catalogue product.

    applications and features hold JSON-encoded lists of strings.
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(300), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=True)
    category_id = Column(String(64), nullable=False)
    applications = Column(Text, nullable=True)
    features = Column(Text, nullable=True)
    image_url = Column(String(1024), nullable=True)
    usage = Column(Text, nullable=True)
    advantages = Column(Text, nullable=True)
    technical_specifications = Column(Text, nullable=True)
    product_code = Column(String(32), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index("idx_products_category", "category_id"),
        Index("idx_products_active", "is_active"),
    )


class ProductImage(Base):
    """Additional product image"""
    __tablename__ = "product_images"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    image_url = Column(String(1024), nullable=False)
    alt_text = Column(String(300), nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_product_images_product", "product_id"),
    )


class ProjectCategory(Base, TimestampMixin):
    """Project category from the fixed project-type set"""
    __tablename__ = "project_categories"

    id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    icon_url = Column(String(1024), nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)


class Project(Base, TimestampMixin):
    """
    Project case study.

    gallery_images holds a JSON-encoded list of public URLs.
    """
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(300), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    category = Column(String(64), nullable=False)
    location = Column(String(200), nullable=True)
    client_name = Column(String(200), nullable=True)
    completion_date = Column(String(32), nullable=True)
    project_value = Column(String(100), nullable=True)
    key_features = Column(Text, nullable=True)
    challenges = Column(Text, nullable=True)
    solutions = Column(Text, nullable=True)
    image_url = Column(String(1024), nullable=True)
    gallery_images = Column(Text, nullable=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_projects_category", "category"),
        Index("idx_projects_active", "is_active"),
    )
