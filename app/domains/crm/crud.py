# app/domains/crm/crud.py

"""
'crm' 도메인의 CRUD 작업을 위한 함수들을 정의하는 모듈입니다.
고객 등록/수정 API는 없으므로 생성/수정 스키마 자리에는 SQLModel을 그대로 둡니다.
"""

from sqlmodel import SQLModel

from app.core.crud_base import CRUDBase
from app.domains.crm import models as crm_models


class ClientCRUD(CRUDBase[crm_models.Client, SQLModel, SQLModel]):
    """Client 모델에 특화된 CRUD 작업을 처리합니다."""


client = ClientCRUD(crm_models.Client)
