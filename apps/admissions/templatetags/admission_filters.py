# admissions/templatetags/admission_filters.py
from django import template

register = template.Library()

STATUS_CLASSES = {
    'PENDING': 'bg-amber-100 dark:bg-amber-900/30 text-amber-800 dark:text-amber-300',
    'PARENT_VERIFIED': 'bg-blue-100 dark:bg-blue-900/30 text-blue-800 dark:text-blue-300',
    'PAYMENT_VERIFIED': 'bg-indigo-100 dark:bg-indigo-900/30 text-indigo-800 dark:text-indigo-300',
    'COMPLETED': 'bg-green-100 dark:bg-green-900/30 text-green-800 dark:text-green-300',
    'APPROVED': 'bg-green-100 dark:bg-green-900/30 text-green-800 dark:text-green-300',
    'VERIFIED': 'bg-green-100 dark:bg-green-900/30 text-green-800 dark:text-green-300',
    'REJECTED': 'bg-red-100 dark:bg-red-900/30 text-red-800 dark:text-red-300',
}


@register.filter
def get_status_class(status):
    """Get CSS class for a status badge"""
    return STATUS_CLASSES.get(status, 'bg-gray-100 dark:bg-gray-900/30 text-gray-800 dark:text-gray-300')
