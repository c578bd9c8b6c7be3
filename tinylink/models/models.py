from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, Text
from sqlalchemy.sql import expression, func

from tinylink.db.database import Base


class Link(Base):
    __tablename__ = "links"

    id = Column(Integer, primary_key=True, index=True)
    # unique across deleted rows too: a code is never handed out twice
    code = Column(String(8), unique=True, index=True, nullable=False)
    target_url = Column(Text, nullable=False)
    click_count = Column(Integer, nullable=False, default=0, server_default="0")
    last_clicked_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=func.now())
    deleted = Column(Boolean, nullable=False, default=False, server_default=expression.false())

    __table_args__ = (
        CheckConstraint("click_count >= 0", name="ck_links_click_count_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Link {self.code} -> {self.target_url}>"
