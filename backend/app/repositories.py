"""Repository classes encapsulating question storage.

There is no database behind this service. `QuestionRepository` describes
the storage boundary and `EchoQuestionRepository` simulates it by echoing
the record back with an id. A real store would implement `save` and raise
`StorageFailure` when it cannot persist the record.
"""

from typing import Callable

from fastapi import Depends

from .errors import StorageFailure
from .schemas import Question
from .utils.ids import timestamp_id

IdGenerator = Callable[[], str]


class QuestionRepository:
    """Storage boundary for validated questions."""

    def save(self, question: Question) -> Question:
        """Store `question` and return the stored record.

        Implementations raise `StorageFailure` when the record cannot be stored.
        """
        raise NotImplementedError


class EchoQuestionRepository(QuestionRepository):
    """Simulated store: assigns a missing id and returns the record unchanged.

    Duplicate ids are accepted; without persistence a conflict is not
    observable.
    """
    def __init__(self, id_generator: IdGenerator):
        self.id_generator = id_generator

    def save(self, question: Question) -> Question:
        if question.id is not None:
            return question
        new_id = self.id_generator()
        if not new_id:
            raise StorageFailure("id generator returned an empty id")
        return question.model_copy(update={"id": new_id})


def get_id_generator() -> IdGenerator:
    """FastAPI dependency returning the id generator for new questions."""
    return timestamp_id


def get_question_repository(id_generator: IdGenerator = Depends(get_id_generator)) -> QuestionRepository:
    """FastAPI dependency returning the question store for a request."""
    return EchoQuestionRepository(id_generator)
