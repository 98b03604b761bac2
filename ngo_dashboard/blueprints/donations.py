from flask import Blueprint, request, jsonify
from ngo_dashboard import db
from ngo_dashboard.models.campaign import Campaign
from ngo_dashboard.models.donation import Donation, DonationMethod
from ngo_dashboard.models.donor import Donor
from ngo_dashboard.utils import db_utils
from ngo_dashboard.utils.validators import json_object, missing_fields, parse_amount, parse_date, parse_enum, parse_id
from datetime import datetime
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('donations', __name__)

# Donations are append-only: there is no update or delete route.

@bp.route('', methods=['GET'])
def get_donations():
    """Get all donations with donor and campaign"""
    try:
        donations = db_utils.get_all_donations(db.session)
        return jsonify({
            'donations': [
                donation.to_dict(include_donor=True, include_campaign=True)
                for donation in donations
            ]
        })
    except Exception as e:
        logger.error(f"Error fetching donations: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch donations'}), 500

@bp.route('', methods=['POST'])
def create_donation():
    """Record a donation from an existing donor"""
    try:
        data = json_object(request.get_json(silent=True))

        missing = missing_fields(data, ['donor_id', 'amount', 'method'])
        if missing:
            return jsonify({'error': f'Missing required field: {missing[0]}'}), 400

        donor_id = parse_id(data['donor_id'], 'donor_id')
        if not db.session.get(Donor, donor_id):
            return jsonify({'error': 'Donor not found'}), 400

        campaign_id = None
        if data.get('campaign_id') not in (None, ''):
            campaign_id = parse_id(data['campaign_id'], 'campaign_id')
            if not db.session.get(Campaign, campaign_id):
                return jsonify({'error': 'Campaign not found'}), 400

        donation = Donation(
            donor_id=donor_id,
            campaign_id=campaign_id,
            amount=parse_amount(data['amount']),
            method=parse_enum(DonationMethod, data['method'], 'donation method'),
            date=parse_date(data['date']) if data.get('date') else datetime.utcnow()
        )

        db.session.add(donation)
        db.session.commit()

        logger.info(f"Recorded donation {donation.id} of {donation.amount} from donor {donor_id}")
        return jsonify({
            'donation': donation.to_dict(include_donor=True, include_campaign=True)
        }), 201

    except ValueError as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error creating donation: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to create donation'}), 500
