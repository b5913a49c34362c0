"""
MIME type and extension helpers shared by the attachment store and resource indexer.
"""

from pathlib import PurePath

DEFAULT_EXTENSION = '.bin'
DEFAULT_RESOURCE_MIME_TYPE = 'text/plain'

MIME_TO_EXTENSION = {
    'text/plain': '.txt',
    'text/markdown': '.md',
    'application/json': '.json',
    'image/jpeg': '.jpg',
    'image/png': '.png',
    'image/gif': '.gif',
    'image/webp': '.webp',
    'application/pdf': '.pdf',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document': '.docx',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet': '.xlsx',
}

EXTENSION_TO_MIME = {
    '.md': 'text/markdown',
    '.txt': 'text/plain',
    '.json': 'application/json',
    '.js': 'application/javascript',
    '.ts': 'application/typescript',
}

TEXT_MIME_PREFIXES = (
    'text/',
    'application/json',
    'application/javascript',
    'application/typescript',
    'application/xml',
    'application/x-yaml',
)

TEXT_EXTENSIONS = frozenset({
    '.txt', '.md', '.json', '.js', '.ts', '.jsx', '.tsx',
    '.py', '.java', '.cpp', '.c', '.h', '.cs', '.go',
    '.rs', '.swift', '.kt', '.rb', '.php', '.sh', '.bat',
    '.xml', '.yaml', '.yml', '.toml', '.ini', '.conf',
    '.html', '.css', '.scss', '.less',
})

SIZE_UNITS = ('B', 'KB', 'MB', 'GB')


def extension_of(name: str) -> str:
    """Return the extension of a filename including the dot, or '' if none."""
    return PurePath(name).suffix


def resolve_extension(name: str, mime_type: str) -> str:
    """Pick the extension for a stored attachment.

    The extension present in ``name`` wins; otherwise ``mime_type`` is mapped
    through MIME_TO_EXTENSION, falling back to a generic binary extension.
    """
    return extension_of(name) or MIME_TO_EXTENSION.get(mime_type, DEFAULT_EXTENSION)


def mime_type_from_extension(ext: str) -> str:
    """Infer a resource MIME type from its extension."""
    return EXTENSION_TO_MIME.get(ext.lower(), DEFAULT_RESOURCE_MIME_TYPE)


def is_text_file(mime_type: str, name: str) -> bool:
    """Check whether content should be returned as decoded text."""
    if any(mime_type.startswith(prefix) for prefix in TEXT_MIME_PREFIXES):
        return True
    return extension_of(name).lower() in TEXT_EXTENSIONS


def is_image(mime_type: str) -> bool:
    return mime_type.startswith('image/')


def format_file_size(num_bytes: int) -> str:
    """Format a byte count with binary-prefixed units and one decimal place.

    Examples:
        512 -> '512.0 B'
        1536 -> '1.5 KB'
    """
    size = float(num_bytes)
    unit_index = 0
    while size >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1
    return f'{size:.1f} {SIZE_UNITS[unit_index]}'
