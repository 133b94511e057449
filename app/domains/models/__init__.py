# app/domains/models/__init__.py

"""
모든 도메인의 SQLModel 테이블 모델을 한 곳에서 임포트합니다.
SQLModel.metadata가 모든 테이블을, SQLAlchemy 매퍼가 모든 관계를 인식하도록 보장합니다.
"""

# crm (Client)
from app.domains.crm.models import Client

# inv (Item, ItemStatusHistory)
from app.domains.inv.models import Item, ItemStatus, ItemStatusHistory

# sls (Sale, SaleItem)
from app.domains.sls.models import Sale, SaleItem

# cnd (Consignment, ConsignmentItem)
from app.domains.cnd.models import Consignment, ConsignmentItem


__all__ = [
    # crm
    "Client",
    # inv
    "Item", "ItemStatus", "ItemStatusHistory",
    # sls
    "Sale", "SaleItem",
    # cnd
    "Consignment", "ConsignmentItem",
]
