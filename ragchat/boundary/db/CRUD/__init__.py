"""
CRUD operations package.

Exports CRUD classes and their module-level singletons.
"""

from ragchat.boundary.db.CRUD.base_crud import BaseCRUD
from ragchat.boundary.db.CRUD.conversation_crud import ConversationCRUD, conversation_crud
from ragchat.boundary.db.CRUD.message_crud import MessageCRUD, message_crud

__all__ = [
    "BaseCRUD",
    "ConversationCRUD",
    "MessageCRUD",
    "conversation_crud",
    "message_crud",
]
