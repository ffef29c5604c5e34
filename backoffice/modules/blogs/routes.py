"""
Blogs Admin Routes
==================
"""

from flask import render_template, jsonify, flash
from backoffice.core.api_client import APIError, get_api, get_image_url
from backoffice.core.auth import login_required, api_login_required
from backoffice.core.logging_service import LoggingService
from . import blogs_bp

EXCERPT_LENGTH = 100


def blog_excerpt(blog):
    """The post's own excerpt, or the start of its content"""
    if blog.get('excerpt'):
        return blog['excerpt']
    content = blog.get('content') or ''
    if len(content) > EXCERPT_LENGTH:
        return content[:EXCERPT_LENGTH] + '...'
    return content


def summarize_blog(blog):
    published = bool(blog.get('published'))
    return {
        'id': blog.get('_id'),
        'title': blog.get('title', ''),
        'slug': blog.get('slug', ''),
        'author': blog.get('author', ''),
        'excerpt': blog_excerpt(blog),
        'image': get_image_url(blog.get('image')),
        'published': published,
        'status_label': 'Published' if published else 'Draft',
        'created_at': (blog.get('createdAt') or '')[:10],
    }


@blogs_bp.route('/')
@login_required
def blogs_manager():
    """Blog posts page"""
    try:
        blogs = get_api().list_collection('/blogs')
    except APIError as e:
        LoggingService.error('blogs', f"Error fetching blogs: {e.message}")
        flash('Could not load blog posts from the storefront API.', 'error')
        blogs = []

    return render_template('blogs/blogs.html', blogs=[summarize_blog(b) for b in blogs])


@blogs_bp.route('/api/blog/<blog_id>/delete', methods=['POST'])
@api_login_required
def api_delete_blog(blog_id):
    try:
        get_api().delete(f"/blogs/{blog_id}")
    except APIError as e:
        LoggingService.log_error_with_traceback('blogs', e, {'blog_id': blog_id})
        return jsonify({'success': False, 'error': 'Failed to delete blog post. Please try again.'}), 502

    LoggingService.log_user_action('blogs', f"Deleted blog {blog_id}")
    return jsonify({'success': True})
