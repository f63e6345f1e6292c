from flask import Blueprint, jsonify, request

from soundgood.instrument.service import InstrumentService

bp = Blueprint("instruments", __name__)

instrument_service = InstrumentService()


@bp.route("", methods=["GET"])
def list_instruments():
    """List instruments available for rent, optionally of one type."""
    instruments = instrument_service.list_instruments(request.args.get("type"))
    return jsonify([i.to_dict() for i in instruments])
