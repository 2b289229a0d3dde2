"""SQLAlchemy ORM models for the journal store."""

from sqlalchemy import (
    Boolean, Column, ForeignKey, Integer, String, Table, Text,
)
from sqlalchemy.orm import DeclarativeBase, relationship


class Base(DeclarativeBase):
    pass


block_refs = Table(
    "block_refs",
    Base.metadata,
    Column("block_id", ForeignKey("blocks.id", ondelete="CASCADE"), primary_key=True),
    Column("page_id", ForeignKey("pages.id", ondelete="CASCADE"), primary_key=True),
)


class Page(Base):
    """A named page.  Journal pages also carry their day as YYYYMMDD."""

    __tablename__ = "pages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)       # lower-cased lookup key
    original_name = Column(String(255), nullable=False)          # as the user typed it
    is_journal = Column(Boolean, nullable=False, default=False)
    journal_day = Column(Integer, nullable=True, index=True)     # e.g. 20240105

    blocks = relationship(
        "Block",
        back_populates="page",
        order_by="Block.position",
        cascade="all, delete-orphan",
    )

    def as_record(self) -> dict:
        """Plain mapping handed to the heatmap pipeline."""
        return {
            "id": self.id,
            "name": self.name,
            "original_name": self.original_name,
            "journal_day": self.journal_day,
        }

    def __repr__(self) -> str:
        return f"<Page name={self.name!r} journal_day={self.journal_day}>"


class Block(Base):
    """One outline block of a page.  Nested blocks point at their parent."""

    __tablename__ = "blocks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    page_id = Column(Integer, ForeignKey("pages.id"), nullable=False, index=True)
    parent_id = Column(Integer, ForeignKey("blocks.id"), nullable=True)
    position = Column(Integer, nullable=False, default=0)
    content = Column(Text, nullable=False, default="")

    page = relationship("Page", back_populates="blocks")
    parent = relationship("Block", remote_side=[id], back_populates="children")
    children = relationship("Block", back_populates="parent", order_by="Block.position")
    refs = relationship("Page", secondary=block_refs)

    def __repr__(self) -> str:
        return f"<Block id={self.id} page_id={self.page_id} content={self.content!r}>"
