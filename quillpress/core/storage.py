"""
Storage Utility
===============

Key-addressed blob storage for uploaded images, with cloud (S3-compatible
bucket) / local branching.

Objects are returned as dicts: {'body': bytes, 'content_type': str}.
"""

import json
import os

from .config import get_config_value

META_DIR = '.meta'


def is_cloud_storage():
    return (get_config_value('STORAGE_BACKEND', 'local') or 'local').lower() == 's3'


def is_valid_key(key):
    """Keys are flat filenames; anything that could walk the filesystem is refused"""
    if not key or key.startswith('.'):
        return False
    return os.path.basename(key) == key and '\\' not in key


def put_object(key, data, content_type):
    """Store bytes under key with the given content type."""
    if not is_valid_key(key):
        raise ValueError(f"Invalid object key: {key!r}")
    if is_cloud_storage():
        return _put_to_bucket(key, data, content_type)
    return _put_locally(key, data, content_type)


def get_object(key):
    """Fetch an object, or None when no object is stored under key."""
    if not is_valid_key(key):
        return None
    if is_cloud_storage():
        return _get_from_bucket(key)
    return _get_locally(key)


def delete_object(key):
    """Delete an object. Returns True if something was removed."""
    if not is_valid_key(key):
        return False
    if is_cloud_storage():
        return _delete_from_bucket(key)
    return _delete_locally(key)


# ===== S3-compatible bucket =====

def _bucket_client():
    import boto3
    return boto3.client(
        's3',
        region_name=get_config_value('S3_REGION'),
        endpoint_url=get_config_value('S3_ENDPOINT_URL'),
        aws_access_key_id=get_config_value('S3_ACCESS_KEY'),
        aws_secret_access_key=get_config_value('S3_SECRET_KEY'),
    )


def _object_key(key):
    prefix = (get_config_value('S3_PREFIX', '') or '').strip('/')
    return f"{prefix}/{key}" if prefix else key


def _put_to_bucket(key, data, content_type):
    client = _bucket_client()
    client.put_object(
        Bucket=get_config_value('S3_BUCKET'),
        Key=_object_key(key),
        Body=data,
        ContentType=content_type,
    )
    return key


def _get_from_bucket(key):
    from botocore.exceptions import ClientError

    client = _bucket_client()
    try:
        response = client.get_object(Bucket=get_config_value('S3_BUCKET'), Key=_object_key(key))
    except ClientError as e:
        if e.response.get('Error', {}).get('Code') in ('NoSuchKey', '404'):
            return None
        raise

    return {
        'body': response['Body'].read(),
        'content_type': response.get('ContentType') or 'application/octet-stream',
    }


def _delete_from_bucket(key):
    client = _bucket_client()
    client.delete_object(Bucket=get_config_value('S3_BUCKET'), Key=_object_key(key))
    return True


# ===== Local folder =====

def _upload_dir():
    upload_dir = get_config_value('UPLOAD_FOLDER')
    os.makedirs(os.path.join(upload_dir, META_DIR), exist_ok=True)
    return upload_dir


def _meta_path(upload_dir, key):
    return os.path.join(upload_dir, META_DIR, f"{key}.json")


def _put_locally(key, data, content_type):
    upload_dir = _upload_dir()
    with open(os.path.join(upload_dir, key), 'wb') as f:
        f.write(data)
    with open(_meta_path(upload_dir, key), 'w') as f:
        json.dump({'content_type': content_type}, f)
    return key


def _get_locally(key):
    upload_dir = _upload_dir()
    filepath = os.path.join(upload_dir, key)
    if not os.path.isfile(filepath):
        return None

    with open(filepath, 'rb') as f:
        body = f.read()

    content_type = 'application/octet-stream'
    meta_path = _meta_path(upload_dir, key)
    if os.path.isfile(meta_path):
        with open(meta_path) as f:
            content_type = json.load(f).get('content_type') or content_type

    return {'body': body, 'content_type': content_type}


def _delete_locally(key):
    upload_dir = _upload_dir()
    filepath = os.path.join(upload_dir, key)
    if not os.path.isfile(filepath):
        return False
    os.unlink(filepath)
    meta_path = _meta_path(upload_dir, key)
    if os.path.isfile(meta_path):
        os.unlink(meta_path)
    return True
