"""Database model for the production fact table."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import relationship

from consulta_prod.core.database import Base, new_id


class ConsultaProd(Base):
    """One production row; each dimension FK is optional."""

    __tablename__ = "consulta_prod"

    id = Column(String(36), primary_key=True, default=new_id)
    prd_dtcomp = Column(DateTime, nullable=False)  # Data Competência
    prd_dtreal = Column(DateTime, nullable=False)  # Data Realização
    prd_cbo = Column(String(36), ForeignKey("cbo.id"), nullable=True)
    prd_prest = Column(String(36), ForeignKey("prestador.id"), nullable=True)
    prd_proc = Column(String(36), ForeignKey("procedimento.id"), nullable=True)
    prd_qtd = Column(Integer, nullable=False)  # Quantidade
    prd_vl_p = Column(Numeric(10, 2), nullable=False)  # Valor
    prd_rub = Column(String(36), ForeignKey("s_rub.id"), nullable=True)
    prd_cidpri = Column(String(20), nullable=True)  # CID Principal
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    cbo = relationship("CBO")
    prestador = relationship("Prestador")
    procedimento = relationship("Procedimento")
    s_rub = relationship("SRub")

    __table_args__ = (
        Index("idx_consulta_prod_dtcomp", "prd_dtcomp"),
        Index("idx_consulta_prod_dtreal", "prd_dtreal"),
    )
