from django import template
from django.urls import reverse, NoReverseMatch

register = template.Library()

NAV_ITEMS = {
    'admin': [
        {'title': 'Dashboard', 'url': 'admin_dashboard'},
        {
            'title': 'People',
            'url': '#',
            'children': [
                {'title': 'Students', 'url': 'students:student_list'},
                {'title': 'Teachers', 'url': 'teachers:teacher_list'},
                {'title': 'Parents', 'url': 'students:parent_list'},
            ],
        },
        {
            'title': 'Academic',
            'url': '#',
            'children': [
                {'title': 'Courses', 'url': 'corecode:course_list'},
                {'title': 'Subjects', 'url': 'corecode:subject_list'},
                {'title': 'Subject Offerings', 'url': 'corecode:offering_list'},
                {'title': 'Lessons', 'url': 'lessons:timetable'},
                {'title': 'Enrollments', 'url': 'enrollments:enrollment_list'},
                {'title': 'Attendance', 'url': 'attendance:attendance_list'},
                {'title': 'Results', 'url': 'result:result_list'},
                {'title': 'Assignments', 'url': 'assignments:assignment_list'},
            ],
        },
        {
            'title': 'Admissions',
            'url': '#',
            'children': [
                {'title': 'Pending Payments', 'url': 'admissions:pending_list'},
            ],
        },
        {'title': 'Announcements', 'url': 'announcements:announcement_list'},
        {'title': 'Events', 'url': 'announcements:event_list'},
    ],
    'teacher': [
        {'title': 'Dashboard', 'url': 'teachers:dashboard'},
        {'title': 'Lessons', 'url': 'lessons:timetable'},
        {'title': 'Attendance', 'url': 'attendance:attendance_sheet'},
        {'title': 'Results', 'url': 'result:result_list'},
        {'title': 'Assignments', 'url': 'assignments:assignment_list'},
        {'title': 'Announcements', 'url': 'announcements:announcement_list'},
        {'title': 'Events', 'url': 'announcements:event_list'},
    ],
    'student': [
        {'title': 'Dashboard', 'url': 'students:dashboard'},
        {'title': 'Results', 'url': 'result:result_list'},
        {'title': 'Assignments', 'url': 'assignments:assignment_list'},
        {'title': 'Announcements', 'url': 'announcements:announcement_list'},
        {'title': 'Events', 'url': 'announcements:event_list'},
    ],
    'parent': [
        {'title': 'Dashboard', 'url': 'parent:dashboard'},
        {'title': 'Results', 'url': 'result:result_list'},
        {'title': 'Announcements', 'url': 'announcements:announcement_list'},
        {'title': 'Events', 'url': 'announcements:event_list'},
    ],
}


@register.inclusion_tag('corecode/navigation/nav.html', takes_context=True)
def role_navigation(context):
    """Navigation menu for the role of the current user, existing URLs only"""
    request = context.get('request')
    role = getattr(request, 'role', None)

    filtered_nav = []
    for item in NAV_ITEMS.get(role, []):
        if item.get('children'):
            valid_children = [c for c in item['children'] if _check_url_exists(c['url'])]
            # Only include parent if it has valid children
            if valid_children:
                filtered_nav.append(dict(item, children=valid_children))
        elif _check_url_exists(item['url']):
            filtered_nav.append(item)

    return {'nav_items': filtered_nav, 'request': request}


@register.filter
def attr(obj, path):
    """Resolve a dotted attribute path, calling methods such as get_sex_display"""
    value = obj
    for name in path.split('.'):
        value = getattr(value, name, None)
        if callable(value):
            value = value()
        if value is None:
            return ''
    return value


def _check_url_exists(url_name):
    """Check if a URL name exists in URL patterns"""
    try:
        if url_name == '#':
            return True
        reverse(url_name)
        return True
    except NoReverseMatch:
        return False
