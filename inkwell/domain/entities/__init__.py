from inkwell.domain.entities.category import Category
from inkwell.domain.entities.post import Comment, Post, Reply
from inkwell.domain.entities.user import Actor, User

__all__ = ["Post", "Comment", "Reply", "Category", "User", "Actor"]
