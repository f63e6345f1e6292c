from flask import Blueprint, jsonify, request

from soundgood.errors import ValidationRejection
from soundgood.lease.service import RentalService, TerminationService

bp = Blueprint("leases", __name__)

rental_service = RentalService()
termination_service = TerminationService()


def _require_int(data: dict, key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationRejection(f"'{key}' must be an integer.")
    return value


@bp.route("", methods=["POST"])
def create_lease():
    """Rent an instrument to a student."""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationRejection("Request body must be a JSON object.")

    end_day = data.get("end_day")
    if not isinstance(end_day, str):
        raise ValidationRejection("'end_day' must be a YYYY-MM-DD string.")

    lease_id = rental_service.create_lease(
        student_id=_require_int(data, "student_id"),
        instrument_id=_require_int(data, "instrument_id"),
        end_day=end_day,
    )
    return jsonify({"lease_id": lease_id}), 201


@bp.route("/<int:lease_id>", methods=["GET"])
def get_lease(lease_id: int):
    """Get lease by ID."""
    lease = rental_service.get_lease(lease_id)
    if not lease:
        return jsonify({"error": "Lease not found"}), 404
    return jsonify(lease.to_dict())


@bp.route("/<int:lease_id>/terminate", methods=["POST"])
def terminate_lease(lease_id: int):
    """End a lease today."""
    termination_service.terminate_lease(lease_id)
    return jsonify({"lease_id": lease_id, "status": "terminated"})
