from ngo_dashboard import db
from enum import Enum

class TaskStatus(Enum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"
    CANCELLED = "Cancelled"

class Task(db.Model):
    __tablename__ = 'tasks'
    
    id = db.Column(db.Integer, primary_key=True)
    project_id = db.Column(db.Integer, db.ForeignKey('projects.id'), nullable=False, index=True)
    description = db.Column(db.Text, nullable=False)
    due_date = db.Column(db.DateTime, nullable=False)
    status = db.Column(db.Enum(TaskStatus), default=TaskStatus.NOT_STARTED, nullable=False)
    
    # Relationships
    task_staff = db.relationship('TaskStaff', backref='task', lazy=True, cascade='all, delete-orphan')
    
    def to_dict(self, include_project=False, include_staff=False):
        data = {
            'id': self.id,
            'project_id': self.project_id,
            'description': self.description,
            'due_date': self.due_date.isoformat(),
            'status': self.status.value
        }
        if include_project:
            data['project'] = self.project.to_dict() if self.project else None
        if include_staff:
            data['assigned_staff'] = [
                {'id': assignment.staff.id, 'name': assignment.staff.name}
                for assignment in self.task_staff
            ]
        return data
    
    def __repr__(self):
        return f'<Task {self.id} - {self.status.value}>'

class TaskStaff(db.Model):
    __tablename__ = 'task_staff'
    
    task_id = db.Column(db.Integer, db.ForeignKey('tasks.id'), primary_key=True)
    staff_id = db.Column(db.Integer, db.ForeignKey('staff.id'), primary_key=True)
    
    def to_dict(self):
        return {
            'task_id': self.task_id,
            'staff_id': self.staff_id
        }
    
    def __repr__(self):
        return f'<TaskStaff {self.task_id}:{self.staff_id}>'
