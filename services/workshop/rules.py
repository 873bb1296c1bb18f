"""Command rules for the Workshop service — pure functions over a session.

Each function takes a validated envelope and the player's WorkshopSession,
applies the command, and returns a CommandResult. Nothing here does I/O.
"""

import logging

from bottega import (
    AddCurrency,
    BuildingStatus,
    BuyShortfall,
    CheckBuilding,
    CollectMaterials,
    CommandResult,
    CraftError,
    Envelope,
    MessageType,
    PlaceMaterial,
    PurchaseMaterials,
    RemoveMaterial,
    SetTemperature,
    UpdateProgress,
    WorkshopSession,
    validate_message,
)

logger = logging.getLogger(__name__)


def process_command(envelope: Envelope, session: WorkshopSession) -> CommandResult:
    """Validate an envelope and dispatch it to its rule."""
    errors = validate_message(envelope)
    if errors:
        return CommandResult.fail(CraftError.INVALID_COMMAND, "; ".join(errors))

    handler = _HANDLERS.get(envelope.type)
    if handler is None:
        return CommandResult.fail(
            CraftError.INVALID_COMMAND, f"'{envelope.type}' is not a command"
        )
    return handler(envelope, session)


def process_place(envelope: Envelope, session: WorkshopSession) -> CommandResult:
    payload = PlaceMaterial.model_validate(envelope.payload)
    return session.workbench.place(payload.material)


def process_remove(envelope: Envelope, session: WorkshopSession) -> CommandResult:
    payload = RemoveMaterial.model_validate(envelope.payload)
    try:
        session.workbench.remove(payload.slot_index)
    except IndexError as e:
        return CommandResult.fail(CraftError.INVALID_COMMAND, str(e))
    return CommandResult()


def process_clear(envelope: Envelope, session: WorkshopSession) -> CommandResult:
    session.workbench.clear()
    return CommandResult()


def process_mix(envelope: Envelope, session: WorkshopSession) -> CommandResult:
    return session.workbench.mix()


def process_set_temperature(envelope: Envelope, session: WorkshopSession) -> CommandResult:
    payload = SetTemperature.model_validate(envelope.payload)
    return session.furnace.set_temperature(payload.temperature)


def process_start(envelope: Envelope, session: WorkshopSession) -> CommandResult:
    return session.furnace.start()


def process_cancel(envelope: Envelope, session: WorkshopSession) -> CommandResult:
    return session.furnace.cancel()


def process_collect(envelope: Envelope, session: WorkshopSession) -> CommandResult:
    """Credit exploration yields to the ledger."""
    payload = CollectMaterials.model_validate(envelope.payload)
    if not payload.materials or not session.ledger.add_raw_materials(payload.materials):
        return CommandResult.fail(
            CraftError.INVALID_COMMAND, f"Invalid quantities in {payload.materials}"
        )
    return CommandResult()


def process_purchase(envelope: Envelope, session: WorkshopSession) -> CommandResult:
    payload = PurchaseMaterials.model_validate(envelope.payload)
    return session.purchase_materials(payload.materials)


def process_buy_shortfall(envelope: Envelope, session: WorkshopSession) -> CommandResult:
    payload = BuyShortfall.model_validate(envelope.payload)
    if payload.building_id not in session.buildings:
        return _unknown_building(payload.building_id)
    return session.buy_shortfall(payload.building_id)


def process_add_currency(envelope: Envelope, session: WorkshopSession) -> CommandResult:
    payload = AddCurrency.model_validate(envelope.payload)
    session.ledger.add_currency(payload.amount)
    logger.info("Awarded %d florins (%s)", payload.amount, payload.reason or "unspecified")
    return CommandResult()


def process_update_progress(envelope: Envelope, session: WorkshopSession) -> CommandResult:
    """Apply whatever progress flags the collaborator reported. Idempotent."""
    payload = UpdateProgress.model_validate(envelope.payload)
    if payload.building_id not in session.buildings:
        return _unknown_building(payload.building_id)

    record = session.progress_for(payload.building_id)
    if payload.badge is not None:
        record.earn_badge(payload.badge)
    if payload.sketch_completed:
        record.mark_sketch_complete()
    if payload.quiz_passed:
        record.mark_quiz_passed()
    if payload.lesson_read:
        record.mark_lesson_read()
    if payload.bookmark_index is not None:
        record.set_bookmark(payload.bookmark_index)
    return CommandResult()


def process_check_building(envelope: Envelope, session: WorkshopSession) -> CommandResult:
    payload = CheckBuilding.model_validate(envelope.payload)
    if payload.building_id not in session.buildings:
        return _unknown_building(payload.building_id)
    return CommandResult()


def building_status(building_id: int, session: WorkshopSession) -> BuildingStatus:
    """Summarize the construction gate for one building."""
    report = session.gate.check(building_id)
    shortfall = session.gate.material_shortfall(building_id)
    return BuildingStatus(
        building_id=building_id,
        can_start=report.can_start,
        requirements_met=report.requirements_met,
        total_requirements=report.total_requirements,
        missing_sciences=report.missing_sciences,
        missing_materials=report.missing_materials,
        raw_deficit=shortfall.raw_deficit,
        cost_to_buy=shortfall.total_cost,
    )


def _unknown_building(building_id: int) -> CommandResult:
    return CommandResult.fail(CraftError.INVALID_COMMAND, f"Unknown building: {building_id}")


_HANDLERS = {
    MessageType.PLACE_MATERIAL: process_place,
    MessageType.REMOVE_MATERIAL: process_remove,
    MessageType.CLEAR_WORKBENCH: process_clear,
    MessageType.MIX: process_mix,
    MessageType.SET_TEMPERATURE: process_set_temperature,
    MessageType.START_FIRING: process_start,
    MessageType.CANCEL_FIRING: process_cancel,
    MessageType.COLLECT_MATERIALS: process_collect,
    MessageType.PURCHASE_MATERIALS: process_purchase,
    MessageType.BUY_SHORTFALL: process_buy_shortfall,
    MessageType.ADD_CURRENCY: process_add_currency,
    MessageType.UPDATE_PROGRESS: process_update_progress,
    MessageType.CHECK_BUILDING: process_check_building,
}
