from blogsphere.extensions import db
from .base import utcnow, isoformat


class Comment(db.Model):
    __tablename__ = "comments"

    id = db.Column(db.Integer, primary_key=True)
    post_id = db.Column(db.Integer, db.ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    content = db.Column(db.String(500), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    author = db.relationship("User", lazy="joined")

    def to_dict(self):
        return {
            "id": self.id,
            "postId": self.post_id,
            "user": {"id": self.author.id, "name": self.author.name} if self.author else None,
            "content": self.content,
            "createdAt": isoformat(self.created_at),
        }

    def __repr__(self):
        return f"<Comment {self.id} on post {self.post_id}>"
