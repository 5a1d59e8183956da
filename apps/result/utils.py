"""
Batch result upsert used by the results API
"""
import logging
import math

from django.db import transaction

from apps.corecode.models import Subject
from apps.students.models import Student

from .models import Result

logger = logging.getLogger(__name__)

SCORE_FIELDS = ('internal', 'external', 'attendance', 'total')


class ResultUpsertError(Exception):
    """Raised when a batch of results cannot be saved"""

    def __init__(self, message, status=400, details=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details


def _to_int(value):
    if isinstance(value, bool):
        raise ValueError
    if isinstance(value, float) and not value.is_integer():
        raise ValueError
    if isinstance(value, str):
        value = value.strip()
    number = int(value)
    if number <= 0:
        raise ValueError
    return number


def _to_score(value):
    if isinstance(value, bool) or value is None:
        raise ValueError
    number = float(value)
    if not math.isfinite(number) or number < 0:
        raise ValueError
    return number


def clean_entry(entry):
    """
    Coerce one raw entry into ``{student_id, subject_id, scores...}``.

    Returns ``(cleaned, errors)`` where errors maps field name to message.
    """
    if not isinstance(entry, dict):
        return None, {'__all__': 'Each result must be an object'}

    cleaned, errors = {}, {}
    for key, name in (('studentId', 'student_id'), ('subjectId', 'subject_id')):
        try:
            cleaned[name] = _to_int(entry.get(key))
        except (TypeError, ValueError):
            errors[key] = 'Must be a positive integer'
    for field in SCORE_FIELDS:
        try:
            cleaned[field] = _to_score(entry.get(field))
        except (TypeError, ValueError):
            errors[field] = 'Must be a number greater than or equal to 0'
    return cleaned, errors


def validate_results_payload(payload):
    """Validate the whole body and return the cleaned entries"""
    if not isinstance(payload, dict) or not isinstance(payload.get('results'), list):
        raise ResultUpsertError('Invalid request: results array is required')
    if not payload['results']:
        raise ResultUpsertError('Invalid results data', details={'results': 'Must not be empty'})

    cleaned_entries, entry_errors = [], {}
    seen = set()
    for index, entry in enumerate(payload['results']):
        cleaned, errors = clean_entry(entry)
        if not errors:
            key = (cleaned['student_id'], cleaned['subject_id'])
            if key in seen:
                errors = {'__all__': 'Duplicate result for this student and subject'}
            seen.add(key)
        if errors:
            entry_errors[str(index)] = errors
        else:
            cleaned_entries.append(cleaned)
    if entry_errors:
        raise ResultUpsertError('Invalid results data', details=entry_errors)
    return cleaned_entries


def upsert_results(payload):
    """
    Create or update every result in the payload, keyed by (student, subject).

    Nothing is written unless every entry is valid and refers to an existing
    student and subject.
    """
    entries = validate_results_payload(payload)

    student_ids = {e['student_id'] for e in entries}
    subject_ids = {e['subject_id'] for e in entries}
    found_students = set(Student.objects.filter(pk__in=student_ids).values_list('pk', flat=True))
    if found_students != student_ids:
        raise ResultUpsertError(
            'One or more students not found', status=404,
            details={'missingStudentIds': sorted(student_ids - found_students)},
        )
    found_subjects = set(Subject.objects.filter(pk__in=subject_ids).values_list('pk', flat=True))
    if found_subjects != subject_ids:
        raise ResultUpsertError(
            'One or more subjects not found', status=404,
            details={'missingSubjectIds': sorted(subject_ids - found_subjects)},
        )

    saved = []
    with transaction.atomic():
        for entry in entries:
            result, created = Result.objects.update_or_create(
                student_id=entry['student_id'],
                subject_id=entry['subject_id'],
                defaults={field: entry[field] for field in SCORE_FIELDS},
            )
            saved.append(result.pk)

    logger.info("Upserted %s results for %s students", len(saved), len(student_ids))
    return list(
        Result.objects.filter(pk__in=saved).select_related('student', 'subject')
    )
