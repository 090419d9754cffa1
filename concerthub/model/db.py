from sqlalchemy.orm import declarative_base
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    func,
)


Base = declarative_base()


# ----------------------------
# ORM models
# ----------------------------
class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, nullable=False, unique=True)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default="admin")
    created_at = Column(DateTime, server_default=func.current_timestamp())


class Concert(Base):
    __tablename__ = "concerts"
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    genre = Column(String, nullable=False)
    date = Column(String, nullable=False)  # YYYY-MM-DD
    time = Column(String, nullable=False)  # HH:MM
    venue = Column(String, nullable=False)
    price = Column(Integer, nullable=False)  # minor units
    image = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.current_timestamp())


class Order(Base):
    __tablename__ = "orders"
    id = Column(Integer, primary_key=True, autoincrement=True)
    concert_id = Column(Integer, ForeignKey("concerts.id"), nullable=False)
    # snapshot, survives concert edits and deletes
    concert_title = Column(String, nullable=False)
    ticket_type = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    price_per_ticket = Column(Integer, nullable=False)
    total_price = Column(Integer, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False)
    order_number = Column(String, nullable=False, unique=True)
    qr_code = Column(Text, nullable=True)  # data:image/png;base64,...
    order_date = Column(DateTime, server_default=func.current_timestamp())

    # only ever "pending"; nothing transitions it yet
    status = Column(String, nullable=False, default="pending")


CONCERT_FIELDS = (
    "title", "genre", "date", "time", "venue", "price", "image",
    "description",
)

ORDER_FIELDS = (
    "concert_id", "concert_title", "ticket_type", "quantity",
    "price_per_ticket", "total_price", "customer_email", "customer_name",
    "customer_phone",
)
