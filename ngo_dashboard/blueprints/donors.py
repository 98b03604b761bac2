from flask import Blueprint, request, jsonify
from sqlalchemy.exc import IntegrityError
from ngo_dashboard import db
from ngo_dashboard.models.donor import Donor, DonorType
from ngo_dashboard.utils import db_utils
from ngo_dashboard.utils.validators import json_object, validate_email, missing_fields, parse_enum, parse_date
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('donors', __name__)

UPDATABLE_FIELDS = ['name', 'email', 'phone', 'type', 'join_date']

DUPLICATE_EMAIL_ERROR = 'A donor with this email already exists'


def _clean_email(value):
    if value is None:
        return None
    email = str(value).strip().lower()
    if not email:
        return None
    if not validate_email(email):
        raise ValueError('Invalid email format')
    return email


@bp.route('', methods=['GET'])
def get_donors():
    """Get all donors with their donations"""
    try:
        donors = db_utils.get_all_donors(db.session)
        return jsonify({
            'donors': [donor.to_dict(include_donations=True) for donor in donors]
        })
    except Exception as e:
        logger.error(f"Error fetching donors: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch donors'}), 500

@bp.route('/stats', methods=['GET'])
def get_donor_stats():
    """Get donor count, total donated and most recent donors"""
    try:
        stats = db_utils.get_donor_statistics(db.session)
        stats['recentDonors'] = [
            donor.to_dict(include_donations=True) for donor in stats['recentDonors']
        ]
        return jsonify({'stats': stats})
    except Exception as e:
        logger.error(f"Error fetching donor statistics: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch donor statistics'}), 500

@bp.route('/<int:donor_id>', methods=['GET'])
def get_donor(donor_id):
    """Get a single donor"""
    try:
        donor = db_utils.get_donor_by_id(db.session, donor_id)
        if not donor:
            return jsonify({'error': 'Donor not found'}), 404

        return jsonify({'donor': donor.to_dict(include_donations=True)})
    except Exception as e:
        logger.error(f"Error fetching donor {donor_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch donor'}), 500

@bp.route('', methods=['POST'])
def create_donor():
    """Create a new donor"""
    try:
        data = json_object(request.get_json(silent=True))

        # Validate required fields
        missing = missing_fields(data, ['name', 'type'])
        if missing:
            return jsonify({'error': f'Missing required field: {missing[0]}'}), 400

        donor_type = parse_enum(DonorType, data['type'], 'donor type')
        email = _clean_email(data.get('email'))

        # Check for duplicate email if provided
        if email and db_utils.get_donor_by_email(db.session, email):
            return jsonify({'error': DUPLICATE_EMAIL_ERROR}), 400

        donor = Donor(
            name=str(data['name']).strip(),
            email=email,
            phone=str(data['phone']).strip() if data.get('phone') else None,
            type=donor_type
        )
        if data.get('join_date'):
            donor.join_date = parse_date(data['join_date'], 'join_date')

        db.session.add(donor)
        db.session.commit()

        logger.info(f"Created donor {donor.id}")
        return jsonify({'donor': donor.to_dict()}), 201

    except ValueError as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 400
    except IntegrityError:
        # Email uniqueness is also enforced by the schema
        db.session.rollback()
        return jsonify({'error': DUPLICATE_EMAIL_ERROR}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error creating donor: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to create donor'}), 500

@bp.route('/<int:donor_id>', methods=['PUT'])
def update_donor(donor_id):
    """Update the supplied fields of a donor"""
    try:
        data = json_object(request.get_json(silent=True))

        if not any(field in data for field in UPDATABLE_FIELDS):
            return jsonify({'error': 'At least one field must be provided to update'}), 400

        donor = db.session.get(Donor, donor_id)
        if not donor:
            return jsonify({'error': 'Donor not found'}), 404

        # Check for duplicate email if email is being changed
        if 'email' in data:
            email = _clean_email(data['email'])
            if email and email != donor.email:
                existing = db_utils.get_donor_by_email(db.session, email)
                if existing and existing.id != donor_id:
                    return jsonify({'error': DUPLICATE_EMAIL_ERROR}), 400
            donor.email = email

        if 'name' in data:
            if not data['name'] or not str(data['name']).strip():
                return jsonify({'error': 'Name cannot be empty'}), 400
            donor.name = str(data['name']).strip()

        if 'phone' in data:
            donor.phone = str(data['phone']).strip() if data['phone'] else None

        if 'type' in data:
            donor.type = parse_enum(DonorType, data['type'], 'donor type')

        if 'join_date' in data:
            donor.join_date = parse_date(data['join_date'], 'join_date')

        db.session.commit()

        logger.info(f"Updated donor {donor_id}")
        return jsonify({'donor': donor.to_dict()})

    except ValueError as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 400
    except IntegrityError:
        # Email uniqueness is also enforced by the schema
        db.session.rollback()
        return jsonify({'error': DUPLICATE_EMAIL_ERROR}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error updating donor {donor_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to update donor'}), 500

@bp.route('/<int:donor_id>', methods=['DELETE'])
def delete_donor(donor_id):
    """Delete a donor that has no donations"""
    try:
        donor = db.session.get(Donor, donor_id)
        if not donor:
            return jsonify({'error': 'Donor not found'}), 404

        dependents = db_utils.count_donor_dependents(db.session, donor_id)
        if any(dependents.values()):
            logger.warning(f"Refused to delete donor {donor_id}: {dependents}")
            return jsonify({
                'error': 'Cannot delete donor with related donations. Remove the donations first.',
                **dependents
            }), 400

        db.session.delete(donor)
        db.session.commit()

        logger.info(f"Deleted donor {donor_id}")
        return jsonify({'deleted': True})

    except Exception as e:
        db.session.rollback()
        logger.error(f"Error deleting donor {donor_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to delete donor'}), 500
