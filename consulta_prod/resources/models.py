"""Database models for the reference tables (CBO, prestador, procedimento, S_RUB)."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Numeric, String, Text

from consulta_prod.core.database import Base, new_id


class CBO(Base):
    """Occupation (Classificação Brasileira de Ocupações)."""

    __tablename__ = "cbo"

    id = Column(String(36), primary_key=True, default=new_id)
    codigo = Column(String(20), unique=True, index=True, nullable=False)
    descricao = Column(Text, nullable=False)
    status = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)


class Prestador(Base):
    """Care provider, either an individual or an organisation."""

    __tablename__ = "prestador"

    id = Column(String(36), primary_key=True, default=new_id)
    codigo = Column(String(20), unique=True, index=True, nullable=False)
    nome_razao_social = Column(String(255), nullable=False)
    cnpj_cpf = Column(String(20), nullable=False)
    tipo = Column(String(50), nullable=False)  # pessoa_fisica, pessoa_juridica
    status = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)


class Procedimento(Base):
    __tablename__ = "procedimento"

    id = Column(String(36), primary_key=True, default=new_id)
    codigo = Column(String(50), unique=True, index=True, nullable=False)
    descricao = Column(Text, nullable=False)
    valor = Column(Numeric(10, 2), nullable=False)
    complexidade = Column(String(50), nullable=False)  # baixa, media, alta
    status = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)


class SRub(Base):
    """Financing source (rubrica)."""

    __tablename__ = "s_rub"

    id = Column(String(36), primary_key=True, default=new_id)
    codigo = Column(String(20), unique=True, index=True, nullable=False)
    descricao = Column(Text, nullable=False)
    tipo_financiamento = Column(String(100), nullable=False)
    status = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)
