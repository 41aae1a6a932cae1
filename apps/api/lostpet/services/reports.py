"""Finder report service layer."""

import logging

from lostpet.core.logging_safety import safe_log_identifier
from lostpet.repositories.memory import InMemoryStore, PetRecord, ReportRecord
from lostpet.schemas.report import CreateReportRequest, Report

logger = logging.getLogger(__name__)


def report_from_record(record: ReportRecord) -> Report:
    return Report(
        id=record.id,
        pet_id=record.pet_id,
        phone_number=record.phone_number,
        city=record.city,
        where=record.where,
        has_pet=record.has_pet,
        additional=record.additional,
        created_at=record.created_at,
    )


class ReportService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def create_report(self, *, pet: PetRecord, payload: CreateReportRequest, request_id: str) -> Report:
        """``pet`` must already be scope-checked against the caller's report token."""
        record = self._store.create_report(
            pet_id=pet.id,
            phone_number=payload.phone_number,
            city=payload.city,
            where=payload.where,
            has_pet=payload.has_pet,
            additional=payload.additional,
        )
        logger.info(
            "report.received request_id=%s pet=%s",
            safe_log_identifier(request_id, prefix="rid"),
            safe_log_identifier(pet.id, prefix="pet"),
        )
        return report_from_record(record)
