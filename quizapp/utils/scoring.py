"""
Scoring of a test submission against the stored correct options.
"""

from typing import Iterable, List, Mapping
from ..models.test_result import AnswerRecord, ScoredTest, SubmittedAnswer, UNANSWERED

def collect_selections(answers: Iterable[SubmittedAnswer]) -> dict:
    """
    Map question id -> selected option. When a question id appears more than
    once the last occurrence wins.
    """
    selections = {}
    for answer in answers:
        selections[answer.question_id] = answer.selected_option
    return selections

def score_answers(
    questions: List[Mapping],
    answers: Iterable[SubmittedAnswer]
) -> ScoredTest:
    """
    Score submitted answers against a test's questions.

    `questions` are question documents in the test's stored order. Each is
    classified as skipped (no answer, or the -1 sentinel), correct (its marks
    are added to the score) or wrong. Answers to questions outside the test
    are ignored.
    """
    selections = collect_selections(answers)

    score = 0
    correct_answers = 0
    wrong_answers = 0
    skipped_answers = 0
    records = []

    for question in questions:
        question_id = question["_id"]
        selected = selections.get(str(question_id))

        if selected is None or selected == UNANSWERED:
            skipped_answers += 1
            records.append(AnswerRecord(
                question_id=question_id,
                selected_option=UNANSWERED,
                is_correct=False
            ))
            continue

        is_correct = selected == question["correct_option"]
        if is_correct:
            score += question.get("marks", 1)
            correct_answers += 1
        else:
            wrong_answers += 1

        records.append(AnswerRecord(
            question_id=question_id,
            selected_option=selected,
            is_correct=is_correct
        ))

    return ScoredTest(
        score=score,
        total_questions=len(records),
        correct_answers=correct_answers,
        wrong_answers=wrong_answers,
        skipped_answers=skipped_answers,
        answers=records
    )
