# backend/app/core/messages.py
"""
User-facing messages in both site languages.

Arabic is the site's primary language and the fallback for any
Accept-Language that is not English.
"""
from typing import Optional

DEFAULT_LANGUAGE = "ar"

MESSAGES = {
    # Generic
    "invalid_input": {
        "ar": "بيانات غير صالحة",
        "en": "Invalid input",
    },
    "internal_error": {
        "ar": "حدث خطأ في الخادم. يرجى المحاولة لاحقاً.",
        "en": "A server error occurred. Please try again later.",
    },
    # Session / authorization
    "not_authenticated": {
        "ar": "غير مصرح - يرجى تسجيل الدخول",
        "en": "Not authenticated - please log in",
    },
    "session_expired": {
        "ar": "انتهت صلاحية الجلسة - يرجى تسجيل الدخول مجدداً",
        "en": "Session expired - please log in again",
    },
    "insufficient_privileges": {
        "ar": "غير مصرح - ليس لديك صلاحيات كافية",
        "en": "Forbidden - insufficient privileges",
    },
    "refresh_missing": {
        "ar": "لا يوجد رمز تحديث",
        "en": "No refresh token",
    },
    "refresh_invalid": {
        "ar": "رمز التحديث غير صالح",
        "en": "Invalid refresh token",
    },
    "account_unavailable": {
        "ar": "المستخدم غير موجود أو غير نشط",
        "en": "User does not exist or is inactive",
    },
    "user_not_found": {
        "ar": "المستخدم غير موجود",
        "en": "User not found",
    },
    # Login
    "invalid_credentials": {
        "ar": "اسم المستخدم أو كلمة المرور غير صحيحة",
        "en": "Incorrect username or password",
    },
    "account_locked": {
        "ar": "الحساب مقفل. يرجى المحاولة بعد {minutes} دقيقة",
        "en": "Account locked. Try again in {minutes} minute(s)",
    },
    "too_many_attempts": {
        "ar": "تم تجاوز عدد المحاولات. يرجى الانتظار {minutes} دقيقة",
        "en": "Too many attempts. Please wait {minutes} minute(s)",
    },
    "logged_out": {
        "ar": "تم تسجيل الخروج بنجاح",
        "en": "Logged out successfully",
    },
    "session_refreshed": {
        "ar": "تم تحديث الجلسة بنجاح",
        "en": "Session refreshed",
    },
    # Voting
    "vote_rate_limited": {
        "ar": "تم تجاوز الحد المسموح. حاول لاحقاً.",
        "en": "Rate limit exceeded. Try again later.",
    },
    "celebrity_not_found": {
        "ar": "المشهور غير موجود",
        "en": "Celebrity not found",
    },
    "already_voted": {
        "ar": "لقد قمت بالتصويت مسبقاً. يمكنك التصويت مرة واحدة فقط.",
        "en": "You have already voted. Only one vote is allowed.",
    },
    # Admin: celebrities
    "celebrity_deleted": {
        "ar": "تم حذف المشهور بنجاح",
        "en": "Celebrity deleted",
    },
    # Registration
    "register_rate_limited": {
        "ar": "تم تجاوز الحد المسموح من الطلبات. يرجى المحاولة لاحقاً.",
        "en": "Too many requests. Please try again later.",
    },
    # Seeding
    "seed_forbidden": {
        "ar": "غير مصرح",
        "en": "Forbidden",
    },
    "username_taken": {
        "ar": "اسم المستخدم موجود بالفعل",
        "en": "Username already exists",
    },
    "weak_password": {
        "ar": "كلمة المرور ضعيفة",
        "en": "Password is too weak",
    },
    "admin_created": {
        "ar": "تم إنشاء المدير بنجاح",
        "en": "Admin created",
    },
    "celebrities_exist": {
        "ar": "المشاهير موجودون بالفعل",
        "en": "Celebrities already exist",
    },
}


def pick_language(accept_language: Optional[str]) -> str:
    """Pick "en" or "ar" from an Accept-Language header value."""
    if not accept_language:
        return DEFAULT_LANGUAGE
    first = accept_language.split(",")[0].strip().lower()
    if first.startswith("en"):
        return "en"
    return DEFAULT_LANGUAGE


def translate(key: str, language: str = DEFAULT_LANGUAGE, **params) -> str:
    """
    Look up a message and fill in its placeholders.

    Unknown keys are returned as-is so a missing entry never turns into
    a server error.
    """
    entry = MESSAGES.get(key)
    if entry is None:
        return key
    text = entry.get(language) or entry[DEFAULT_LANGUAGE]
    return text.format(**params) if params else text
