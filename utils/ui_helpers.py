from markupsafe import Markup, escape
import markdown

# Pill styles per kind; the first entry is the fallback for unknown keys
STATUS_STYLES = {
    'category': {
        'active': 'pill-emerald',
        'inactive': 'pill-gray',
    },
    'course': {
        'published': 'pill-emerald',
        'draft': 'pill-amber',
    },
    'user': {
        'active': 'pill-emerald',
        'blocked': 'pill-rose',
    },
}

def status_pill_key(kind, key):
    styles = STATUS_STYLES[kind]
    key = (key or '').lower()
    return key if key in styles else next(iter(styles))

def status_pill_style(kind, key):
    """CSS class of the status pill for an entity kind and status key."""
    return STATUS_STYLES[kind][status_pill_key(kind, key)]

def get_file_icon(filename):
    """Get appropriate icon for file type"""
    ext = filename.rsplit('.', 1)[1].lower() if filename and '.' in filename else ''
    icons = {
        'mp4': '🎥', 'mov': '🎥', 'webm': '🎥', 'mkv': '🎥',
        'pdf': '📄', 'doc': '📝', 'docx': '📝', 'txt': '📄',
        'jpg': '🖼️', 'jpeg': '🖼️', 'png': '🖼️', 'gif': '🖼️', 'svg': '🖼️', 'webp': '🖼️',
        'mp3': '🎵', 'wav': '🎵', 'aac': '🎵', 'ogg': '🎵', 'm4a': '🎵',
    }
    return icons.get(ext, '📎')

def material_icon(material_type):
    return {'pdf': '📄', 'audio': '🎵', 'worksheet': '📝'}.get(material_type, '📎')

def format_size(size):
    """Bytes -> '1.5 MB'; empty string for unknown size."""
    if not size:
        return ''
    return f"{size / (1024 * 1024):.1f} MB"

def format_duration(seconds):
    """Duration in whole minutes, or None when unknown."""
    if not seconds:
        return None
    return int(round(seconds / 60))

def initials(name):
    parts = [p for p in (name or '').split(' ') if p]
    return ''.join(p[0] for p in parts[:2]).upper()

def render_markdown_content(md_text):
    # Raw HTML coming from the API is escaped before rendering
    return Markup(markdown.markdown(str(escape(md_text or '')), extensions=['nl2br']))

def register_template_helpers(app):
    app.jinja_env.filters['markdown'] = render_markdown_content
    app.jinja_env.filters['file_size'] = format_size
    app.jinja_env.filters['initials'] = initials
    app.jinja_env.globals.update(
        status_pill_style=status_pill_style,
        status_pill_key=status_pill_key,
        get_file_icon=get_file_icon,
        material_icon=material_icon,
        format_duration=format_duration,
    )
