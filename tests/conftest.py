import pytest

from models.quiz_models import StudentResult

# A trimmed Moodle grades export: identity columns, a non-question column and three scored questions
MOODLE_EXPORT = (
    "Surname,First name,Email address,State,Grade/10.00,Q. 1 /2.00,Q. 2 /4.00,Q. 3 /4.00\n"
    "Lee,Ann,ann@example.com,Finished,6.00,2.00,0.00,4.00\n"
    "\n"
    "Silva,Bruno,bruno@example.com,Finished,0.00,0.00,0.00,-\n"
    "Kim,Carla,carla@example.com,Finished,10.00,2.00,4.00,4.00\n"
)

AIKEN_BANK = """What is 2+2?
A) 3
B) 4
ANSWER: B

Which planet is known as the
red planet?
A) Venus
B) Mars
C) Jupiter
ANSWER: B

Pick the prime number.
A) 4
B) 6
C) 7
"""


@pytest.fixture
def moodle_export_bytes():
    return MOODLE_EXPORT.encode("utf-8")


@pytest.fixture
def aiken_bank_text():
    return AIKEN_BANK


@pytest.fixture
def students():
    return [
        # Stable student: most answers right
        StudentResult(name="Ann Lee", correct_answers=["1", "3", "4"], wrong_answers=["2"]),
        # Struggling student: everything wrong
        StudentResult(name="Bruno Silva", correct_answers=[], wrong_answers=["1", "2", "3", "4"]),
        # Edge case: no question columns at all
        StudentResult(name="Joanna Annis"),
    ]
