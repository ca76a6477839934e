"""User-visible message catalogue.

Every message returned to the dashboard is looked up here by key and rendered
in ``settings.DISPLAY_LANGUAGE`` (``en`` or ``ar``). Missing translations fall
back to English so a typo in the language setting never produces an empty
response.
"""
from typing import Dict

from admin_panel.config import settings

MESSAGES: Dict[str, Dict[str, str]] = {
    # Login / session
    "invalid_credentials": {
        "en": "Invalid username or password",
        "ar": "اسم المستخدم أو كلمة المرور غير صحيحة",
    },
    "account_locked": {
        "en": "Account is temporarily locked due to multiple failed login attempts",
        "ar": "تم قفل الحساب مؤقتاً بسبب محاولات تسجيل دخول متعددة خاطئة",
    },
    "account_deactivated": {
        "en": "Account is deactivated",
        "ar": "الحساب غير نشط",
    },
    "two_factor_required": {
        "en": "Two-factor authentication code required",
        "ar": "رمز المصادقة الثنائية مطلوب",
    },
    "invalid_2fa_code": {
        "en": "Invalid two-factor authentication code",
        "ar": "رمز المصادقة الثنائية غير صحيح",
    },
    "login_success": {
        "en": "Logged in successfully",
        "ar": "تم تسجيل الدخول بنجاح",
    },
    "logout_success": {
        "en": "Logged out successfully",
        "ar": "تم تسجيل الخروج بنجاح",
    },
    "no_token": {
        "en": "Authentication failed: no token provided",
        "ar": "فشل التحقق: لم يتم تقديم رمز الدخول",
    },
    "invalid_token": {
        "en": "Authentication failed: invalid or expired token",
        "ar": "فشل التحقق: رمز الدخول غير صالح أو منتهي",
    },
    "admin_not_found": {
        "en": "Authentication failed: admin not found",
        "ar": "فشل التحقق: المشرف غير موجود",
    },
    "auth_account_deactivated": {
        "en": "Authentication failed: account is deactivated",
        "ar": "فشل التحقق: الحساب غير نشط",
    },
    "auth_account_locked": {
        "en": "Authentication failed: account is temporarily locked",
        "ar": "فشل التحقق: الحساب مقفل مؤقتاً",
    },
    "insufficient_permissions": {
        "en": "Insufficient permissions for {resource}:{action}",
        "ar": "ليس لديك صلاحية {resource}:{action}",
    },
    # Two-factor setup
    "2fa_generated": {
        "en": "Two-factor secret generated",
        "ar": "تم إنشاء رمز المصادقة الثنائية",
    },
    "2fa_not_generated": {
        "en": "Two-factor secret has not been generated",
        "ar": "لم يتم إنشاء رمز المصادقة الثنائية",
    },
    "2fa_enabled": {
        "en": "Two-factor authentication enabled",
        "ar": "تم تفعيل المصادقة الثنائية بنجاح",
    },
    "2fa_disabled": {
        "en": "Two-factor authentication disabled",
        "ar": "تم إلغاء تفعيل المصادقة الثنائية",
    },
    "2fa_not_enabled": {
        "en": "Two-factor authentication is not enabled",
        "ar": "المصادقة الثنائية غير مفعلة",
    },
    "2fa_already_enabled": {
        "en": "Two-factor authentication is already enabled; disable it first",
        "ar": "المصادقة الثنائية مفعلة بالفعل، يرجى إلغاء تفعيلها أولاً",
    },
    "invalid_code": {
        "en": "Invalid code",
        "ar": "الرمز غير صحيح",
    },
    "invalid_action": {
        "en": "Invalid action",
        "ar": "إجراء غير صالح",
    },
    # Generic
    "validation_failed": {
        "en": "Validation failed",
        "ar": "فشل التحقق من البيانات",
    },
    "rate_limited": {
        "en": "Too many requests. Please try again later.",
        "ar": "طلبات كثيرة جداً. يرجى المحاولة لاحقاً.",
    },
    "internal_error": {
        "en": "Internal server error",
        "ar": "خطأ داخلي في الخادم",
    },
    "not_found": {
        "en": "{entity} not found",
        "ar": "{entity} غير موجود",
    },
    "reason_too_short": {
        "en": "A reason of at least {min_length} characters is required",
        "ar": "يجب تقديم سبب ({min_length} أحرف على الأقل)",
    },
    # Users
    "no_valid_fields": {
        "en": "No valid fields to update",
        "ar": "لا توجد حقول صالحة للتحديث",
    },
    "username_taken": {
        "en": "Username is already taken",
        "ar": "اسم المستخدم مستخدم بالفعل",
    },
    "user_update": {"en": "User updated successfully", "ar": "تم تحديث المستخدم بنجاح"},
    "user_block": {"en": "User blocked successfully", "ar": "تم حظر المستخدم بنجاح"},
    "user_unblock": {"en": "User unblocked successfully", "ar": "تم إلغاء حظر المستخدم بنجاح"},
    "user_warn": {"en": "User warned successfully", "ar": "تم تحذير المستخدم بنجاح"},
    "user_deleted": {"en": "User deleted successfully", "ar": "تم حذف المستخدم بنجاح"},
    "delete_reason_prefix": {"en": "Account deleted: ", "ar": "حذف الحساب: "},
    # Moderation
    "message_deleted": {"en": "Message deleted successfully", "ar": "تم حذف الرسالة بنجاح"},
    "media_deleted": {"en": "Media file deleted successfully", "ar": "تم حذف الملف بنجاح"},
    "room_block": {"en": "Room blocked successfully", "ar": "تم حظر الغرفة بنجاح"},
    "room_unblock": {"en": "Room unblocked successfully", "ar": "تم إلغاء حظر الغرفة بنجاح"},
    "report_resolve": {"en": "Report resolved", "ar": "تم حل البلاغ"},
    "report_dismiss": {"en": "Report dismissed", "ar": "تم رفض البلاغ"},
    "report_closed": {
        "en": "Report has already been closed",
        "ar": "تم إغلاق البلاغ مسبقاً",
    },
    # System settings
    "setting_updated": {"en": "Setting updated successfully", "ar": "تم تحديث الإعداد بنجاح"},
    "setting_type_mismatch": {
        "en": "Value for {setting} must be of type {data_type}",
        "ar": "يجب أن تكون قيمة {setting} من نوع {data_type}",
    },
    # Admins
    "admin_created": {"en": "Admin created successfully", "ar": "تم إنشاء المشرف بنجاح"},
    "admin_updated": {"en": "Admin updated successfully", "ar": "تم تحديث المشرف بنجاح"},
    "admin_deactivated": {"en": "Admin deactivated successfully", "ar": "تم تعطيل المشرف بنجاح"},
    "admin_exists": {
        "en": "An admin with this username or email already exists",
        "ar": "يوجد مشرف بنفس اسم المستخدم أو البريد الإلكتروني",
    },
    "cannot_deactivate_self": {
        "en": "You cannot deactivate your own account",
        "ar": "لا يمكنك تعطيل حسابك الخاص",
    },
    "cannot_change_own_role": {
        "en": "You cannot change your own role",
        "ar": "لا يمكنك تغيير دورك الخاص",
    },
    "superadmin_role_required": {
        "en": "Only a super admin can manage super admin accounts",
        "ar": "فقط المشرف العام يمكنه إدارة حسابات المشرفين العامين",
    },
    "permissions_fixed": {
        "en": "Permissions updated successfully",
        "ar": "تم تحديث الصلاحيات بنجاح",
    },
}


def translate(key: str, **params) -> str:
    """Render message ``key`` in the configured display language."""
    entry = MESSAGES.get(key)
    if entry is None:
        return key.format(**params) if params else key

    text = entry.get(settings.DISPLAY_LANGUAGE) or entry["en"]
    return text.format(**params) if params else text
