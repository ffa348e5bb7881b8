#app/data/models/cart.py
from sqlalchemy import BigInteger, Column, Integer, JSON, String

from app.data.database import Base


class CartModel(Base):
    __tablename__ = "carts"

    cart_id = Column(String(36), primary_key=True)
    #lista pozycji w formacie JSON (camelCase, tak jak w API)
    items = Column(JSON, nullable=False, default=list)

    #epoch ms
    last_updated = Column(BigInteger, nullable=False, index=True)
    created_at = Column(BigInteger, nullable=False)

    item_count = Column(Integer, nullable=False, default=0, index=True)
    version = Column(Integer, nullable=False, default=1)
