from ngo_dashboard import db
from enum import Enum

class StaffRole(Enum):
    PROJECT_MANAGER = "Project Manager"
    FIELD_OFFICER = "Field Officer"
    COORDINATOR = "Coordinator"
    FINANCE_OFFICER = "Finance Officer"
    ADMINISTRATOR = "Administrator"
    EXECUTIVE = "Executive"
    VOLUNTEER = "Volunteer"

class Staff(db.Model):
    __tablename__ = 'staff'
    
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(120), nullable=False, index=True)
    role = db.Column(db.Enum(StaffRole), nullable=False)
    
    # Relationships
    task_staff = db.relationship('TaskStaff', backref='staff', lazy=True)
    
    def to_dict(self, include_tasks=False):
        data = {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role.value
        }
        if include_tasks:
            data['tasks'] = [
                assignment.task.to_dict(include_project=True) for assignment in self.task_staff
            ]
        return data
    
    def __repr__(self):
        return f'<Staff {self.name} - {self.role.value}>'
