from flask import Blueprint, request, jsonify
from ngo_dashboard import db
from ngo_dashboard.models.campaign import Campaign
from ngo_dashboard.models.project import Project, ProjectStatus
from ngo_dashboard.utils import db_utils
from ngo_dashboard.utils.validators import json_object, missing_fields, parse_date, parse_enum, parse_id
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('projects', __name__)

REQUIRED_FIELDS = ['name', 'start_date', 'end_date', 'status']
UPDATABLE_FIELDS = ['name', 'description', 'start_date', 'end_date', 'status', 'campaign_id']


def resolve_campaign_id(value):
    """Return a validated campaign id, or None to detach the project"""
    if value is None or value == '':
        return None
    campaign_id = parse_id(value, 'campaign_id')
    if not db.session.get(Campaign, campaign_id):
        raise ValueError('Campaign not found')
    return campaign_id


def apply_project_fields(project, data):
    if 'name' in data:
        if not data['name'] or not str(data['name']).strip():
            raise ValueError('Name cannot be empty')
        project.name = str(data['name']).strip()
    if 'description' in data:
        project.description = data['description']
    if 'start_date' in data:
        project.start_date = parse_date(data['start_date'], 'start_date')
    if 'end_date' in data:
        project.end_date = parse_date(data['end_date'], 'end_date')
    if 'status' in data:
        project.status = parse_enum(ProjectStatus, data['status'], 'project status')
    if 'campaign_id' in data:
        project.campaign_id = resolve_campaign_id(data['campaign_id'])


@bp.route('', methods=['GET'])
def get_projects():
    """Get all projects with campaign, beneficiaries, KPIs, reports and tasks"""
    try:
        projects = db_utils.get_all_projects(db.session)
        return jsonify({
            'projects': [project.to_dict(include_relations=True) for project in projects]
        })
    except Exception as e:
        logger.error(f"Error fetching projects: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch projects'}), 500

@bp.route('/<int:project_id>', methods=['GET'])
def get_project(project_id):
    """Get a project with all related data"""
    try:
        project = db_utils.get_project_by_id(db.session, project_id)
        if not project:
            return jsonify({'error': 'Project not found'}), 404

        return jsonify({
            'project': project.to_dict(include_relations=True, include_financials=True)
        })
    except Exception as e:
        logger.error(f"Error fetching project {project_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch project'}), 500

@bp.route('/<int:project_id>/kpis', methods=['GET'])
def get_project_kpis(project_id):
    """Get the KPIs tracked for a project"""
    try:
        if not db.session.get(Project, project_id):
            return jsonify({'error': 'Project not found'}), 404

        kpis = db_utils.get_project_kpis(db.session, project_id)
        return jsonify({'kpis': [kpi.to_dict() for kpi in kpis]})
    except Exception as e:
        logger.error(f"Error fetching KPIs for project {project_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch project KPIs'}), 500

@bp.route('/<int:project_id>/tasks', methods=['GET'])
def get_project_tasks(project_id):
    """Get a project's tasks with assigned staff"""
    try:
        if not db.session.get(Project, project_id):
            return jsonify({'error': 'Project not found'}), 404

        tasks = db_utils.get_project_tasks(db.session, project_id)
        return jsonify({'tasks': [task.to_dict(include_staff=True) for task in tasks]})
    except Exception as e:
        logger.error(f"Error fetching tasks for project {project_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch project tasks'}), 500

@bp.route('', methods=['POST'])
def create_project():
    """Create a new project, optionally linked to a campaign"""
    try:
        data = json_object(request.get_json(silent=True))

        missing = missing_fields(data, REQUIRED_FIELDS)
        if missing:
            return jsonify({'error': f'Missing required field: {missing[0]}'}), 400

        project = Project()
        apply_project_fields(project, data)

        db.session.add(project)
        db.session.commit()

        logger.info(f"Created project {project.id}")
        return jsonify({'project': project.to_dict()}), 201

    except ValueError as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error creating project: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to create project'}), 500

@bp.route('/<int:project_id>', methods=['PUT'])
def update_project(project_id):
    """Update the supplied fields of a project"""
    try:
        data = json_object(request.get_json(silent=True))

        if not any(field in data for field in UPDATABLE_FIELDS):
            return jsonify({'error': 'At least one field must be provided to update'}), 400

        project = db.session.get(Project, project_id)
        if not project:
            return jsonify({'error': 'Project not found'}), 404

        apply_project_fields(project, data)
        db.session.commit()

        logger.info(f"Updated project {project_id}")
        return jsonify({'project': project.to_dict()})

    except ValueError as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error updating project {project_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to update project'}), 500

@bp.route('/<int:project_id>', methods=['DELETE'])
def delete_project(project_id):
    """Delete a project that has no dependent records"""
    try:
        project = db.session.get(Project, project_id)
        if not project:
            return jsonify({'error': 'Project not found'}), 404

        dependents = db_utils.count_project_dependents(db.session, project_id)
        if any(dependents.values()):
            logger.warning(f"Refused to delete project {project_id}: {dependents}")
            return jsonify({
                'error': 'Cannot delete project with related records. Remove the related records first.',
                **dependents
            }), 400

        db.session.delete(project)
        db.session.commit()

        logger.info(f"Deleted project {project_id}")
        return jsonify({'deleted': True})

    except Exception as e:
        db.session.rollback()
        logger.error(f"Error deleting project {project_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to delete project'}), 500
