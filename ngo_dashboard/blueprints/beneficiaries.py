from flask import Blueprint, jsonify
from ngo_dashboard import db
from ngo_dashboard.utils import db_utils
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('beneficiaries', __name__)

@bp.route('', methods=['GET'])
def get_beneficiaries():
    """Get all beneficiaries with the projects serving them"""
    try:
        beneficiaries = db_utils.get_all_beneficiaries(db.session)
        return jsonify({
            'beneficiaries': [
                beneficiary.to_dict(include_projects=True) for beneficiary in beneficiaries
            ]
        })
    except Exception as e:
        logger.error(f"Error fetching beneficiaries: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch beneficiaries'}), 500
