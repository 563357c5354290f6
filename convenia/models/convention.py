"""
Convention request models
"""

from datetime import datetime
from convenia.models.database import db, Timestamp

STATUS_IN_PROGRESS = 'In Progress'
STATUS_APPROVED = 'Approved'
STATUS_REJECTED = 'Rejected'
STATUS_TO_MODIFY = 'To Modify'
REQUEST_STATUSES = (STATUS_IN_PROGRESS, STATUS_APPROVED, STATUS_REJECTED, STATUS_TO_MODIFY)

REQUEST_TYPES = (
    'Student Exchange',
    'Double Degree',
    'Research',
    'Training',
    'Internship',
    'Relocation',
)


class ConventionRequest(db.Model):
    """Partnership request submitted by a teacher"""
    __tablename__ = 'requests'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    type = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=False)
    # Not a foreign key: requests outlive the account that filed them
    teacher_id = db.Column(db.String(100), nullable=False, index=True)
    status = db.Column(db.String(50), nullable=False, default=STATUS_IN_PROGRESS, index=True)
    created_at = db.Column(Timestamp, default=datetime.utcnow, index=True)
    updated_at = db.Column(Timestamp, default=datetime.utcnow, onupdate=datetime.utcnow)

    documents = db.relationship(
        'RequestDocument',
        backref='request',
        cascade='all, delete-orphan',
        order_by='RequestDocument.id',
        lazy=True,
    )

    def to_dict(self):
        """Convert to dictionary, with nested documents"""
        return {
            'id': self.id,
            'title': self.title,
            'type': self.type,
            'description': self.description,
            'teacherId': self.teacher_id,
            'status': self.status,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
            'documents': [doc.to_dict() for doc in self.documents]
        }


class RequestDocument(db.Model):
    """Metadata of a file attached to a request; the bytes live on disk"""
    __tablename__ = 'request_documents'

    id = db.Column(db.Integer, primary_key=True)
    request_id = db.Column(db.Integer, db.ForeignKey('requests.id', ondelete='CASCADE'),
                           nullable=False, index=True)
    file_name = db.Column(db.String(255), nullable=False)
    file_path = db.Column(db.String(500), nullable=False)
    file_size = db.Column(db.Integer, nullable=True)
    mime_type = db.Column(db.String(255), nullable=True)
    uploaded_at = db.Column(Timestamp, default=datetime.utcnow)

    def to_dict(self):
        """Convert to dictionary"""
        return {
            'id': self.id,
            'fileName': self.file_name,
            'filePath': self.file_path,
            'fileSize': self.file_size,
            'mimeType': self.mime_type,
            'uploadedAt': self.uploaded_at.isoformat() if self.uploaded_at else None
        }
