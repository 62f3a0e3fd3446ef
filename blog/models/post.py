"""
Post Model
"""

from blog.extensions import db
from blog.models.user import _iso


class Post(db.Model):
    """A blog post written by one user"""
    __tablename__ = 'posts'

    writable_fields = ('id', 'author_id', 'title', 'body')
    references = {'author_id': 'User'}

    id = db.Column(db.Integer, primary_key=True)
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    title = db.Column(db.String(200))
    body = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, default=db.func.current_timestamp(),
                           onupdate=db.func.current_timestamp())

    author = db.relationship('User', back_populates='posts', foreign_keys=[author_id])
    comments = db.relationship('Comment', back_populates='post', lazy=True,
                               order_by='Comment.id')

    def to_dict(self, include=()):
        data = {
            'id': self.id,
            'author_id': self.author_id,
            'title': self.title,
            'body': self.body,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at),
        }
        if 'author' in include:
            data['author'] = self.author.to_dict() if self.author else None
        if 'comments' in include:
            data['comments'] = [comment.to_dict() for comment in self.comments]
        return data

    def __repr__(self):
        return f'<Post {self.id} by User:{self.author_id}>'
