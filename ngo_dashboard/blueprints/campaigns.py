from flask import Blueprint, request, jsonify
from ngo_dashboard import db
from ngo_dashboard.models.campaign import Campaign, CampaignStatus
from ngo_dashboard.utils import db_utils
from ngo_dashboard.utils.aggregation import campaign_financial_summary
from ngo_dashboard.utils.validators import json_object, missing_fields, parse_amount, parse_date, parse_enum
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('campaigns', __name__)

REQUIRED_FIELDS = ['name', 'start_date', 'end_date', 'target_amount', 'status']
UPDATABLE_FIELDS = ['name', 'description', 'start_date', 'end_date', 'target_amount', 'status']


def apply_campaign_fields(campaign, data):
    """Copy supplied fields onto the campaign, parsing as it goes"""
    if 'name' in data:
        if not data['name'] or not str(data['name']).strip():
            raise ValueError('Name cannot be empty')
        campaign.name = str(data['name']).strip()
    if 'description' in data:
        campaign.description = data['description']
    if 'start_date' in data:
        campaign.start_date = parse_date(data['start_date'], 'start_date')
    if 'end_date' in data:
        campaign.end_date = parse_date(data['end_date'], 'end_date')
    if 'target_amount' in data:
        campaign.target_amount = parse_amount(data['target_amount'], 'target_amount')
    if 'status' in data:
        campaign.status = parse_enum(CampaignStatus, data['status'], 'campaign status')


@bp.route('', methods=['GET'])
def get_campaigns():
    """Get all campaigns with donations, projects, reports and financial records"""
    try:
        campaigns = db_utils.get_all_campaigns(db.session)
        return jsonify({
            'campaigns': [campaign.to_dict(include_relations=True) for campaign in campaigns]
        })
    except Exception as e:
        logger.error(f"Error fetching campaigns: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch campaigns'}), 500

@bp.route('/<int:campaign_id>', methods=['GET'])
def get_campaign(campaign_id):
    """Get a campaign with its donations and their donors"""
    try:
        campaign = db_utils.get_campaign_by_id(db.session, campaign_id)
        if not campaign:
            return jsonify({'error': 'Campaign not found'}), 404

        return jsonify({
            'campaign': campaign.to_dict(include_relations=True, include_donors=True)
        })
    except Exception as e:
        logger.error(f"Error fetching campaign {campaign_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch campaign'}), 500

@bp.route('/<int:campaign_id>/summary', methods=['GET'])
def get_campaign_summary(campaign_id):
    """Get donation and ledger totals for a campaign"""
    try:
        campaign = db_utils.get_campaign_with_financials(db.session, campaign_id)
        if not campaign:
            return jsonify({'error': 'Campaign not found'}), 404

        return jsonify({'summary': campaign_financial_summary(campaign)})
    except Exception as e:
        logger.error(f"Error fetching campaign summary {campaign_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch campaign summary'}), 500

@bp.route('', methods=['POST'])
def create_campaign():
    """Create a new campaign"""
    try:
        data = json_object(request.get_json(silent=True))

        missing = missing_fields(data, REQUIRED_FIELDS)
        if missing:
            return jsonify({'error': f'Missing required field: {missing[0]}'}), 400

        campaign = Campaign()
        apply_campaign_fields(campaign, data)

        db.session.add(campaign)
        db.session.commit()

        logger.info(f"Created campaign {campaign.id}")
        return jsonify({'campaign': campaign.to_dict()}), 201

    except ValueError as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error creating campaign: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to create campaign'}), 500

@bp.route('/<int:campaign_id>', methods=['PUT'])
def update_campaign(campaign_id):
    """Update the supplied fields of a campaign"""
    try:
        data = json_object(request.get_json(silent=True))

        if not any(field in data for field in UPDATABLE_FIELDS):
            return jsonify({'error': 'At least one field must be provided to update'}), 400

        campaign = db.session.get(Campaign, campaign_id)
        if not campaign:
            return jsonify({'error': 'Campaign not found'}), 404

        apply_campaign_fields(campaign, data)
        db.session.commit()

        logger.info(f"Updated campaign {campaign_id}")
        return jsonify({'campaign': campaign.to_dict()})

    except ValueError as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error updating campaign {campaign_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to update campaign'}), 500

@bp.route('/<int:campaign_id>', methods=['DELETE'])
def delete_campaign(campaign_id):
    """Delete a campaign that has no dependent records"""
    try:
        campaign = db.session.get(Campaign, campaign_id)
        if not campaign:
            return jsonify({'error': 'Campaign not found'}), 404

        dependents = db_utils.count_campaign_dependents(db.session, campaign_id)
        if any(dependents.values()):
            logger.warning(f"Refused to delete campaign {campaign_id}: {dependents}")
            return jsonify({
                'error': 'Cannot delete campaign with associated projects, donations, financial records or reports',
                **dependents
            }), 400

        db.session.delete(campaign)
        db.session.commit()

        logger.info(f"Deleted campaign {campaign_id}")
        return jsonify({'deleted': True})

    except Exception as e:
        db.session.rollback()
        logger.error(f"Error deleting campaign {campaign_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to delete campaign'}), 500
