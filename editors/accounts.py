"""
Editor for the signed-in admin's own profile and the password-change form.
"""
from editors.learning import EntityEditor
from services import admin_auth_service
from utils.security_utils import validate_email


class ProfileEditor(EntityEditor):
    preview_field = 'profile_image'
    upload_fields = {'profile_file': ('profile_image', 'other')}
    text_fields = ('full_name', 'email')
    save_error = 'settings.profileError'

    def defaults(self, **context):
        return {'full_name': '', 'email': '', 'profile_image': ''}

    def validate(self, draft):
        if not (draft.get('full_name') or '').strip():
            return 'settings.validation.fullNameRequired'
        if not validate_email((draft.get('email') or '').strip()):
            return 'settings.validation.emailInvalid'
        return None

    def build_payload(self, draft):
        return {
            'fullName': draft['full_name'].strip(),
            'email': draft['email'].strip(),
            'profileImage': draft.get('profile_image') or '',
        }

    # The profile endpoint addresses the token's owner, not an id
    def create(self, payload):
        return admin_auth_service.update_admin_profile(payload)

    def update(self, entity_id, payload):
        return admin_auth_service.update_admin_profile(payload)


def validate_password_change(current_password, new_password, confirm_password):
    """Translation key of the first problem, or None."""
    if not current_password or not new_password or not confirm_password:
        return 'settings.validation.passwordFields'
    if new_password != confirm_password:
        return 'settings.validation.passwordMismatch'
    return None
