import re
import uuid

from flask import Response, jsonify, request, url_for

from quillpress.core.logging_service import logger
from quillpress.core.storage import get_object, put_object
from quillpress.modules.auth import admin_api_required

from . import images_bp

ALLOWED_CONTENT_TYPES = {
    'image/jpeg': 'jpg',
    'image/png': 'png',
    'image/gif': 'gif',
    'image/webp': 'webp',
}

CACHE_CONTROL = 'public, max-age=31536000'


def file_extension(filename, content_type):
    """Extension of the uploaded name, or one derived from the content type"""
    if filename and '.' in filename:
        ext = filename.rsplit('.', 1)[1]
        if re.fullmatch(r'[a-z0-9]{1,10}', ext.lower()):
            return ext
    return ALLOWED_CONTENT_TYPES[content_type]


def generate_image_key(filename, content_type):
    return f"{uuid.uuid4().hex}.{file_extension(filename, content_type)}"


@images_bp.route('/admin/upload', methods=['POST'])
@admin_api_required
def upload_image():
    """Upload image for articles"""
    file = request.files.get('image')
    if file is None or file.filename == '':
        return jsonify({'error': 'No file uploaded'}), 400

    content_type = file.mimetype
    if content_type not in ALLOWED_CONTENT_TYPES:
        return jsonify({'error': 'Invalid file type. Only JPG, PNG, GIF, and WebP are allowed.'}), 400

    key = generate_image_key(file.filename, content_type)
    try:
        put_object(key, file.read(), content_type)
    except Exception as e:
        logger.log_error_with_traceback('images', e, {'key': key})
        return jsonify({'error': f'Upload failed: {e}'}), 500

    logger.log_user_action('images', 'image uploaded', {'key': key, 'content_type': content_type})
    return jsonify({
        'success': True,
        'url': url_for('images.serve_image', filename=key),
        'filename': key
    })


@images_bp.route('/images/<path:filename>')
def serve_image(filename):
    try:
        stored = get_object(filename)
    except Exception as e:
        logger.log_error_with_traceback('images', e, {'key': filename})
        return 'Error serving image', 500

    if stored is None:
        return 'Image not found', 404

    response = Response(stored['body'], mimetype=stored['content_type'])
    response.headers['Cache-Control'] = CACHE_CONTROL
    return response
