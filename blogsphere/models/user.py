from werkzeug.security import generate_password_hash, check_password_hash

from blogsphere.extensions import db
from .base import utcnow, isoformat


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), nullable=False)
    email = db.Column(db.String(120), nullable=False, unique=True, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        # nunca exponer password_hash
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "createdAt": isoformat(self.created_at),
        }

    def __repr__(self):
        return f"<User {self.email}>"
