# library_admin/admins/routes.py
"""
Admin management routes: listing with filters, creation and soft deletion.
"""

from functools import wraps

from flask import abort, current_app, flash, redirect, request, url_for
from flask_login import current_user, login_required

from library_admin.admins import bp
from library_admin.admins.forms import SEX_CHOICES, CreateAdminForm
from library_admin.extensions import limiter
from library_admin.logging_config import log_admin_action, scrub_context
from library_admin.services import AdminService, ListingParams, list_admins
from library_admin.services.listing import LISTING_QUERY_KEYS
from library_admin.views import pop_old_input, render_view, respond_to_failure


# --- Helper decorator for admin-only access ---
def admin_required(f):
    """
    Decorator to restrict access to admin users only.
    Checks that the current user owns an admin profile.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            abort(401)

        if not current_user.is_admin:
            current_app.logger.warning(f"Non-admin user {current_user.id} attempted to access admin route")
            abort(403)

        return f(*args, **kwargs)
    return decorated_function


def admin_action_limit():
    return current_app.config.get("RATELIMIT_ADMIN_ACTION", "100 per hour")


def listing_query_args(values):
    """The caller's listing parameters, to be echoed on redirect."""
    query = {}
    for key in LISTING_QUERY_KEYS + ('user_type_id[]',):
        items = values.getlist(key)
        if not items:
            continue
        query[key] = items if (len(items) > 1 or key.endswith('[]')) else items[0]
    return query


# --- Listing ---
@bp.route('/')
@login_required
@admin_required
def index():
    """List users, defaulting to staff admins, with search, sort and pagination."""
    config = current_app.config
    params = ListingParams.from_args(
        request.args,
        default_per_page=config.get('ADMIN_LIST_PER_PAGE', 10),
        max_per_page=config.get('ADMIN_LIST_MAX_PER_PAGE', 100)
    )

    listing = list_admins(
        params,
        staff_admin_key=config.get('STAFF_ADMIN_TYPE_KEY', 'staff_admin'),
        max_per_page=config.get('ADMIN_LIST_MAX_PER_PAGE', 100)
    )

    return render_view(
        'admins/Index',
        template_context={'params': params, 'query_args': listing_query_args(request.args)},
        **listing.to_props()
    )


# --- Creation ---
@bp.route('/create')
@login_required
@admin_required
def create():
    """Show the form for creating a new admin."""
    old_input = pop_old_input()
    form = CreateAdminForm(data=old_input)
    return render_view(
        'admins/Create',
        template_context={'form': form},
        old=old_input or {},
        sexChoices=[{'value': value, 'label': label} for value, label in SEX_CHOICES],
    )


@bp.route('/', methods=['POST'])
@login_required
@admin_required
@limiter.limit(admin_action_limit)
def store():
    """Validate and create a new staff admin."""
    form = CreateAdminForm()

    if not form.validate_on_submit():
        flash('Please fix the validation errors below.', 'error')
        return render_view(
            'admins/Create',
            status=422,
            template_context={'form': form},
            old=scrub_context(request.form.to_dict()),
            errors=form.errors,
        )

    result = AdminService.create_admin(
        form.admin_data(),
        staff_admin_key=current_app.config.get('STAFF_ADMIN_TYPE_KEY', 'staff_admin')
    )

    if not result:
        return respond_to_failure(
            result,
            fallback=url_for('admins.create'),
            action='creating admin user',
            keep_input=request.form.to_dict()
        )

    user = result.value
    log_admin_action(current_user.id, 'create_admin', user.id,
                     library_id=user.library_id, role_title=user.admin.role_title)
    flash(result.message, 'success')
    return redirect(url_for('admins.index'))


# --- Deletion ---
@bp.route('/<int:user_id>', methods=['POST', 'DELETE'])
@bp.route('/<int:user_id>/delete', methods=['POST'])
@login_required
@admin_required
@limiter.limit(admin_action_limit)
def destroy(user_id):
    """Soft-delete a user and return to the listing the caller was viewing."""
    result = AdminService.delete_admin(user_id)

    if not result:
        return respond_to_failure(
            result,
            fallback=url_for('admins.index'),
            action='deleting admin'
        )

    log_admin_action(current_user.id, 'delete_admin', user_id, library_id=result.value.library_id)
    flash(result.message, 'success')
    return redirect(url_for('admins.index', **listing_query_args(request.values)), code=303)
