from flask import Blueprint, request, jsonify
from ngo_dashboard import db
from ngo_dashboard.models.project import Project
from ngo_dashboard.models.staff import Staff, StaffRole
from ngo_dashboard.models.task import Task, TaskStaff, TaskStatus
from ngo_dashboard.utils import db_utils
from ngo_dashboard.utils.aggregation import count_by, staff_workload, task_summary
from ngo_dashboard.utils.validators import json_object, validate_email, missing_fields, parse_date, parse_enum, parse_id
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('hr', __name__)

RECENT_TASKS = 10

# -----------------------------------------------------------------------------
# HR Overview
# -----------------------------------------------------------------------------

@bp.route('', methods=['GET'])
def get_hr_overview():
    """Get staff roster with workloads and the task board"""
    try:
        staff = db_utils.get_all_staff_with_tasks(db.session)
        recent_tasks = db_utils.get_tasks_by_due_date(db.session, limit=RECENT_TASKS)

        return jsonify({
            'stats': {
                'totalStaff': len(staff),
                'staffByRole': count_by(staff, lambda member: member.role)
            },
            'staffData': [staff_workload(member) for member in staff],
            'tasksByStatus': db_utils.get_task_status_counts(db.session),
            'recentTasks': [task_summary(task) for task in recent_tasks]
        })
    except Exception as e:
        logger.error(f"Error fetching HR data: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch HR data'}), 500

@bp.route('/staff/<int:staff_id>', methods=['GET'])
def get_staff_member(staff_id):
    """Get a staff member with assigned tasks"""
    try:
        member = db_utils.get_staff_by_id(db.session, staff_id)
        if not member:
            return jsonify({'error': 'Staff member not found'}), 404

        return jsonify({'staff': member.to_dict(include_tasks=True)})
    except Exception as e:
        logger.error(f"Error fetching staff member {staff_id}: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch staff member'}), 500

# -----------------------------------------------------------------------------
# HR Mutations
# -----------------------------------------------------------------------------

@bp.route('', methods=['POST'])
def process_hr_request():
    """Create a staff member, a task or a task assignment depending on type"""
    try:
        data = json_object(request.get_json(silent=True))

        request_type = data.get('type')
        handler = HR_REQUEST_HANDLERS.get(request_type) if isinstance(request_type, str) else None
        if handler is None:
            return jsonify({'error': 'Invalid request type'}), 400

        return handler(data)

    except ValueError as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error processing HR request: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to process HR request'}), 500

def create_staff(data):
    missing = missing_fields(data, ['name', 'email', 'role'])
    if missing:
        return jsonify({'error': f'Missing required field: {missing[0]}'}), 400

    email = str(data['email']).strip().lower()
    if not validate_email(email):
        return jsonify({'error': 'Invalid email format'}), 400

    member = Staff(
        name=str(data['name']).strip(),
        email=email,
        role=parse_enum(StaffRole, data['role'], 'staff role')
    )
    db.session.add(member)
    db.session.commit()

    logger.info(f"Created staff member {member.id}")
    return jsonify({'staff': member.to_dict()}), 201

def create_task(data):
    missing = missing_fields(data, ['projectId', 'description', 'dueDate'])
    if missing:
        return jsonify({'error': f'Missing required field: {missing[0]}'}), 400

    project_id = parse_id(data['projectId'], 'projectId')
    if not db.session.get(Project, project_id):
        return jsonify({'error': 'Project not found'}), 400

    staff_values = data.get('staffIds') or []
    if not isinstance(staff_values, list):
        raise ValueError('Invalid staffIds. Must be a list of staff ids')

    staff_ids = []
    for value in staff_values:
        staff_id = parse_id(value, 'staffIds')
        if not db.session.get(Staff, staff_id):
            return jsonify({'error': f'Staff member {staff_id} not found'}), 400
        if staff_id not in staff_ids:
            staff_ids.append(staff_id)

    task = Task(
        project_id=project_id,
        description=str(data['description']).strip(),
        due_date=parse_date(data['dueDate'], 'dueDate'),
        status=parse_enum(TaskStatus, data['status'], 'task status') if data.get('status') else TaskStatus.NOT_STARTED
    )
    task.task_staff = [TaskStaff(staff_id=staff_id) for staff_id in staff_ids]

    db.session.add(task)
    db.session.commit()

    logger.info(f"Created task {task.id} with {len(staff_ids)} assigned staff")
    return jsonify({'task': task.to_dict(include_staff=True)}), 201

def create_task_assignment(data):
    missing = missing_fields(data, ['taskId', 'staffId'])
    if missing:
        return jsonify({'error': f'Missing required field: {missing[0]}'}), 400

    task_id = parse_id(data['taskId'], 'taskId')
    staff_id = parse_id(data['staffId'], 'staffId')

    if not db.session.get(Task, task_id):
        return jsonify({'error': 'Task not found'}), 400
    if not db.session.get(Staff, staff_id):
        return jsonify({'error': 'Staff member not found'}), 400
    if db.session.get(TaskStaff, (task_id, staff_id)):
        return jsonify({'error': 'Staff member is already assigned to this task'}), 400

    assignment = TaskStaff(task_id=task_id, staff_id=staff_id)
    db.session.add(assignment)
    db.session.commit()

    logger.info(f"Assigned staff member {staff_id} to task {task_id}")
    return jsonify({'assignment': assignment.to_dict()}), 201

HR_REQUEST_HANDLERS = {
    'staff': create_staff,
    'task': create_task,
    'task_assignment': create_task_assignment
}
