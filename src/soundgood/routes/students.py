from flask import Blueprint, jsonify

from soundgood.lease.service import RentalService

bp = Blueprint("students", __name__)

rental_service = RentalService()


@bp.route("/<int:student_id>/leases", methods=["GET"])
def list_leases(student_id: int):
    """List a student's active leases."""
    leases = rental_service.list_student_leases(student_id)
    return jsonify([lease.to_dict() for lease in leases])
