# consulta_prod/reporting/service.py
"""Report execution: parse the filter, compile it, run it, shape the rows."""

import logging
import time
from typing import Any, List, Optional

from sqlalchemy.engine import Row

from consulta_prod.audit.dao import AuditDAO
from consulta_prod.core import config
from consulta_prod.core.database import transaction
from consulta_prod.core.schemas import Page
from consulta_prod.production.schemas import CBORef, PrestadorRef, ProcedimentoRef, ProductionRow, SRubRef
from consulta_prod.query.builder import FilterCompiler
from consulta_prod.query.parser import parse_filters
from consulta_prod.query.schemas import ReportFilter
from consulta_prod.reporting.dao import ReportDAO
from consulta_prod.reporting.schemas import ExportRequest, ExportResponse

logger = logging.getLogger(__name__)


class ReportService:
    """Service for the filtered production report and its export."""

    def __init__(self, report_dao: ReportDAO, audit_dao: AuditDAO, compiler: Optional[FilterCompiler] = None):
        self.report_dao = report_dao
        self.audit_dao = audit_dao
        self.compiler = compiler or FilterCompiler()

    @staticmethod
    def _to_row(row: Row) -> ProductionRow:
        record, cbo, prestador, procedimento, s_rub = row
        return ProductionRow(
            id=record.id,
            prd_dtcomp=record.prd_dtcomp,
            prd_dtreal=record.prd_dtreal,
            prd_qtd=record.prd_qtd,
            prd_vl_p=record.prd_vl_p,
            prd_cidpri=record.prd_cidpri,
            cbo=CBORef.model_validate(cbo) if cbo is not None else None,
            prestador=PrestadorRef.model_validate(prestador) if prestador is not None else None,
            procedimento=ProcedimentoRef.model_validate(procedimento) if procedimento is not None else None,
            s_rub=SRubRef.model_validate(s_rub) if s_rub is not None else None,
        )

    def get_report_data(self, filters: Any = None, page: int = 1, limit: int = 10) -> Page[ProductionRow]:
        report_filter = parse_filters(filters)
        predicate = self.compiler.compile(report_filter)

        start_time = time.time()
        rows, total = self.report_dao.fetch_page(predicate, page=page, limit=limit)
        elapsed_ms = (time.time() - start_time) * 1000
        logger.info(
            "Report page %s (limit %s): %s of %s rows, %d clause(s), %.1fms",
            page,
            limit,
            len(rows),
            total,
            len(report_filter.clauses),
            elapsed_ms,
        )
        return Page[ProductionRow](data=[self._to_row(row) for row in rows], total=total)

    def export(self, request: ExportRequest, actor_id: Optional[str] = None) -> ExportResponse:
        """
        Run the report for export and record the export in the audit trail.

        File rendering happens outside this service; the response carries the
        total and a sample of the matching rows.
        """
        report_filter: ReportFilter = parse_filters(request.filters)
        predicate = self.compiler.compile(report_filter)

        rows: List[Row] = self.report_dao.fetch_rows(predicate, offset=0, limit=config.EXPORT_MAX_ROWS)
        export_format = getattr(request.format, "value", request.format)

        with transaction(self.audit_dao.db):
            self.audit_dao.record(
                action="export",
                table_name="consulta_prod",
                user_id=actor_id,
                new_values={
                    "format": export_format,
                    "filters": report_filter.describe(),
                    "fields": list(request.fields),
                    "total": len(rows),
                },
            )

        logger.info("Export (%s) of %s rows requested by %s", export_format, len(rows), actor_id)
        return ExportResponse(
            success=True,
            message=f"Export to {export_format.upper()} prepared with {len(rows)} records",
            total=len(rows),
            data=[self._to_row(row) for row in rows[: config.EXPORT_SAMPLE_ROWS]],
        )
