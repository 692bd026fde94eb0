"""
Localized response messages (English / Arabic).

Messages are looked up by dotted key, e.g. ``t("Quiz.quiz_not_found")``.
The locale is negotiated from the request's Accept-Language header and
falls back to the configured default.
"""
from typing import Optional

from flask import has_request_context, request

from digitaltests.config import config


MESSAGES = {
    "en": {
        "Common.server_error": "Internal server error",

        "Auth.middleware.not_logged_in": "You are not logged in. Please log in first",
        "Auth.middleware.invalid_or_expired_token": "Invalid or expired session, please log in again",
        "Auth.middleware.already_logged_in": "You are already logged in",
        "Auth.middleware.account_inactive": "Your account is not active. Please activate your account first",

        "Auth.login_success": "Logged in successfully",
        "Auth.logout_success": "Logged out successfully",
        "Auth.email_required": "Email is required",
        "Auth.user_not_found_register": "No user found with this email, please register first",
        "Auth.user_inactive": "Your account is not active, please activate it first",
        "Auth.reset_password_subject": "Reset your password",
        "Auth.check_email_reset_password": "Please check your email to reset your password",
        "Auth.password_length": "Password must be at least 6 characters long",
        "Auth.invalid_or_expired_token": "Invalid or expired token",
        "Auth.invalid_token_or_user_not_found": "Invalid token or user not found",
        "Auth.password_reset_success": "Your password has been reset successfully",
        "Auth.Service.password_required": "Password is required",
        "Auth.Service.email_or_username_required": "Email or username is required",
        "Auth.Service.invalid_email": "No account found with this email",
        "Auth.Service.invalid_username": "No account found with this username",
        "Auth.Service.invalid_password": "Incorrect password",

        "User.username_exists": "Username already exists",
        "User.email_exists": "Email already exists",
        "User.account_activation_subject": "Activate your account",
        "User.registration_success_email": "Registration successful. Please check your email to activate your account",
        "User.registration_success_username": "Registration successful with username",
        "User.activation_token_required": "Activation token is required",
        "User.user_not_found": "User not found",
        "User.account_already_active": "Account is already active",
        "User.account_activation_success_subject": "Your account has been activated",
        "User.account_activated_successfully": "Account activated successfully",
        "User.token_expired": "Activation token has expired",
        "User.token_invalid": "Invalid activation token",
        "User.email_required": "Email is required",
        "User.user_not_found_with_email": "No user found with this email",
        "User.resend_activation_email_success": "Activation email sent again, please check your inbox",
        "User.user_retrieved_successfully": "User retrieved successfully",
        "User.user_updated_successfully": "User updated successfully",
        "User.email_sending_failed": "Failed to send the activation email",
        "User.goodbye_subject": "Your account has been deleted",
        "User.account_deleted_successfully": "Account deleted successfully",

        "Validation.RegisterValidation.name_missing": "Name is required",
        "Validation.RegisterValidation.name_length": "Name must be between 2 and 50 characters",
        "Validation.RegisterValidation.username_length": "Username must be between 3 and 30 characters",
        "Validation.RegisterValidation.username_format": "Username may only contain letters, numbers and underscores",
        "Validation.RegisterValidation.invalid_email": "Please enter a valid email address",
        "Validation.RegisterValidation.password_missing": "Password is required",
        "Validation.RegisterValidation.password_length": "Password must be between 6 and 50 characters",
        "Validation.RegisterValidation.email_or_username_required": "Either a username or an email must be provided",

        "Quiz.title_required": "Quiz title is required",
        "Quiz.description_required": "Quiz description is required",
        "Quiz.time_required": "Quiz time must be a positive number",
        "Quiz.invalid_visibility": "Visibility must be either public or private",
        "Quiz.invalid_questions": "Questions must be a list of this quiz's question ids",
        "Quiz.quiz_created_successfully": "Quiz created successfully",
        "Quiz.public_quizzes_retrieved_successfully": "Public quizzes retrieved successfully",
        "Quiz.quiz_not_found": "Quiz not found",
        "Quiz.not_authorized_to_access": "You are not authorized to access this quiz",
        "Quiz.quiz_visibility_message": "This quiz is {visibility}",
        "Quiz.quiz_retrieved_successfully": "Quiz retrieved successfully",
        "Quiz.user_quizzes_retrieved_successfully": "Your quizzes were retrieved successfully",
        "Quiz.not_authorized_to_update": "You are not authorized to update this quiz",
        "Quiz.quiz_updated_successfully": "Quiz updated successfully",
        "Quiz.not_authorized_to_delete": "You are not authorized to delete this quiz",
        "Quiz.quiz_deleted_successfully": "Quiz deleted successfully",
        "Quiz.not_authorized_to_toggle_visibility": "You are not authorized to change this quiz's visibility",
        "Quiz.visibility_toggled_successfully": "Quiz visibility changed successfully",

        "Library.library_retrieved_successfully": "Library retrieved successfully",
        "Library.quiz_not_found_in_library": "Quiz not found in your library",
        "Library.quiz_removed_successfully": "Quiz removed from your library",
        "Library.quiz_id_required": "Quiz id is required",
        "Library.quiz_not_found_or_unauthorized": "Quiz not found or you are not its owner",
        "Library.quiz_link_generated_successfully": "Quiz link generated successfully",
        "Library.token_required": "Token is required",
        "Library.admin_cannot_add_quiz": "Admins cannot add quizzes to a library",
        "Library.invalid_or_expired_token": "Invalid or expired share link",
        "Library.quiz_not_found": "Quiz not found",
        "Library.quiz_already_in_library": "Quiz is already in your library",
        "Library.quiz_added_successfully": "Quiz added to your library",
        "Library.quiz_not_found_or_not_public": "Quiz not found or not public",
        "Library.public_quiz_added_successfully": "Public quiz added to your library",
        "Library.quiz_retrieved_successfully": "Quiz retrieved successfully",

        "Question.quiz_id_required": "Quiz id is required",
        "Question.question_id_required": "Question id is required",
        "Question.quiz_not_found": "Quiz not found",
        "Question.no_questions_found": "No questions found for this quiz",
        "Question.questions_found": "Questions retrieved successfully",
        "Question.required_fields_missing": "Quiz id, question, options and correct option are required",
        "Question.invalid_options": "Options must be a list of at least two answers",
        "Question.invalid_correct_option": "The correct option must be the index of one of the options",
        "Question.not_authorized_to_add": "You are not authorized to add questions to this quiz",
        "Question.question_added_successfully": "Question added successfully",
        "Question.not_authorized_to_delete": "You are not authorized to delete this question",
        "Question.question_not_found_in_quiz": "Question not found in this quiz",
        "Question.question_deleted_successfully": "Question deleted successfully",
        "Question.question_not_found": "Question not found",
        "Question.not_authorized_to_update": "You are not authorized to update this question",
        "Question.not_authorized_to_access": "You are not authorized to access this question",
        "Question.question_updated_successfully": "Question updated successfully",
        "Question.question_found": "Question retrieved successfully",

        "Score.quiz_id_required": "Quiz id is required",
        "Score.invalid_answers": "Answers must be a list of option indexes",
        "Score.user_not_found": "User not found",
        "Score.user_only_submission": "Only users can submit quizzes",
        "Score.quiz_not_in_library": "This quiz is not in your library",
        "Score.already_submitted": "You have already submitted this quiz",
        "Score.quiz_not_found": "Quiz not found",
        "Score.quiz_has_no_questions": "This quiz has no questions",
        "Score.quiz_submitted_successfully": "Quiz submitted successfully",
        "Score.score_id_required": "Score id is required",
        "Score.score_not_found": "Score not found",
        "Score.score_retrieved_successfully": "Score retrieved successfully",
        "Score.no_scores_found": "No scores found",
        "Score.scores_retrieved_successfully": "Scores retrieved successfully",
        "Score.only_quiz_owner_can_delete": "Only the quiz owner can delete this score",
        "Score.score_deleted_successfully": "Score deleted successfully",
        "Score.no_owned_quizzes_found": "You do not own any quizzes",
        "Score.no_scores_found_for_owned_quizzes": "No scores found for your quizzes",
    },
    "ar": {
        "Common.server_error": "حدث خطأ في الخادم",

        "Auth.middleware.not_logged_in": "أنت غير مسجل الدخول، يرجى تسجيل الدخول أولاً",
        "Auth.middleware.invalid_or_expired_token": "الجلسة غير صالحة أو منتهية، يرجى تسجيل الدخول مرة أخرى",
        "Auth.middleware.already_logged_in": "أنت مسجل الدخول بالفعل",
        "Auth.middleware.account_inactive": "حسابك غير مفعل، يرجى تفعيل حسابك أولاً",

        "Auth.login_success": "تم تسجيل الدخول بنجاح",
        "Auth.logout_success": "تم تسجيل الخروج بنجاح",
        "Auth.email_required": "البريد الإلكتروني مطلوب",
        "Auth.user_not_found_register": "لا يوجد مستخدم بهذا البريد الإلكتروني، يرجى التسجيل أولاً",
        "Auth.user_inactive": "حسابك غير مفعل، يرجى تفعيله أولاً",
        "Auth.reset_password_subject": "إعادة تعيين كلمة المرور",
        "Auth.check_email_reset_password": "يرجى التحقق من بريدك الإلكتروني لإعادة تعيين كلمة المرور",
        "Auth.password_length": "يجب أن تكون كلمة المرور مكونة من 6 أحرف على الأقل",
        "Auth.invalid_or_expired_token": "الرمز غير صالح أو منتهي الصلاحية",
        "Auth.invalid_token_or_user_not_found": "الرمز غير صالح أو المستخدم غير موجود",
        "Auth.password_reset_success": "تمت إعادة تعيين كلمة المرور بنجاح",
        "Auth.Service.password_required": "كلمة المرور مطلوبة",
        "Auth.Service.email_or_username_required": "البريد الإلكتروني أو اسم المستخدم مطلوب",
        "Auth.Service.invalid_email": "لا يوجد حساب بهذا البريد الإلكتروني",
        "Auth.Service.invalid_username": "لا يوجد حساب باسم المستخدم هذا",
        "Auth.Service.invalid_password": "كلمة المرور غير صحيحة",

        "User.username_exists": "اسم المستخدم موجود بالفعل",
        "User.email_exists": "البريد الإلكتروني موجود بالفعل",
        "User.account_activation_subject": "تفعيل حسابك",
        "User.registration_success_email": "تم التسجيل بنجاح، يرجى التحقق من بريدك الإلكتروني لتفعيل حسابك",
        "User.registration_success_username": "تم التسجيل بنجاح باستخدام اسم المستخدم",
        "User.activation_token_required": "رمز التفعيل مطلوب",
        "User.user_not_found": "المستخدم غير موجود",
        "User.account_already_active": "الحساب مفعل بالفعل",
        "User.account_activation_success_subject": "تم تفعيل حسابك",
        "User.account_activated_successfully": "تم تفعيل الحساب بنجاح",
        "User.token_expired": "انتهت صلاحية رمز التفعيل",
        "User.token_invalid": "رمز التفعيل غير صالح",
        "User.email_required": "البريد الإلكتروني مطلوب",
        "User.user_not_found_with_email": "لا يوجد مستخدم بهذا البريد الإلكتروني",
        "User.resend_activation_email_success": "تم إرسال بريد التفعيل مرة أخرى، يرجى التحقق من بريدك",
        "User.user_retrieved_successfully": "تم جلب بيانات المستخدم بنجاح",
        "User.user_updated_successfully": "تم تحديث بيانات المستخدم بنجاح",
        "User.email_sending_failed": "فشل إرسال بريد التفعيل",
        "User.goodbye_subject": "تم حذف حسابك",
        "User.account_deleted_successfully": "تم حذف الحساب بنجاح",

        "Validation.RegisterValidation.name_missing": "الاسم مطلوب",
        "Validation.RegisterValidation.name_length": "يجب أن يكون الاسم بين 2 و 50 حرفًا",
        "Validation.RegisterValidation.username_length": "يجب أن يحتوي اسم المستخدم على 3 أحرف على الأقل ولا يزيد عن 30 حرفًا",
        "Validation.RegisterValidation.username_format": "يجب أن يحتوي اسم المستخدم على أحرف وأرقام وشرطات سفلية فقط",
        "Validation.RegisterValidation.invalid_email": "يرجى إدخال عنوان بريد إلكتروني صالح",
        "Validation.RegisterValidation.password_missing": "كلمة المرور مطلوبة",
        "Validation.RegisterValidation.password_length": "يجب أن تكون كلمة المرور بين 6 و 50 حرفًا",
        "Validation.RegisterValidation.email_or_username_required": "يجب توفير إما اسم المستخدم أو البريد الإلكتروني",

        "Quiz.title_required": "يجب أن يكون للامتحان عنوان",
        "Quiz.description_required": "يجب أن يكون للامتحان وصف",
        "Quiz.time_required": "يجب أن تكون مدة الامتحان رقمًا موجبًا",
        "Quiz.invalid_visibility": "يجب أن تكون الرؤية عامة أو خاصة",
        "Quiz.invalid_questions": "يجب أن تكون الأسئلة قائمة بمعرفات أسئلة هذا الامتحان",
        "Quiz.quiz_created_successfully": "تم إنشاء الامتحان بنجاح",
        "Quiz.public_quizzes_retrieved_successfully": "تم جلب الامتحانات العامة بنجاح",
        "Quiz.quiz_not_found": "الامتحان غير موجود",
        "Quiz.not_authorized_to_access": "غير مصرح لك بالوصول إلى هذا الامتحان",
        "Quiz.quiz_visibility_message": "هذا الامتحان {visibility}",
        "Quiz.quiz_retrieved_successfully": "تم جلب الامتحان بنجاح",
        "Quiz.user_quizzes_retrieved_successfully": "تم جلب امتحاناتك بنجاح",
        "Quiz.not_authorized_to_update": "غير مصرح لك بتعديل هذا الامتحان",
        "Quiz.quiz_updated_successfully": "تم تحديث الامتحان بنجاح",
        "Quiz.not_authorized_to_delete": "غير مصرح لك بحذف هذا الامتحان",
        "Quiz.quiz_deleted_successfully": "تم حذف الامتحان بنجاح",
        "Quiz.not_authorized_to_toggle_visibility": "غير مصرح لك بتغيير رؤية هذا الامتحان",
        "Quiz.visibility_toggled_successfully": "تم تغيير رؤية الامتحان بنجاح",

        "Library.library_retrieved_successfully": "تم جلب المكتبة بنجاح",
        "Library.quiz_not_found_in_library": "الامتحان غير موجود في مكتبتك",
        "Library.quiz_removed_successfully": "تمت إزالة الامتحان من مكتبتك",
        "Library.quiz_id_required": "معرف الامتحان مطلوب",
        "Library.quiz_not_found_or_unauthorized": "الامتحان غير موجود أو لست مالكه",
        "Library.quiz_link_generated_successfully": "تم إنشاء رابط الامتحان بنجاح",
        "Library.token_required": "الرمز مطلوب",
        "Library.admin_cannot_add_quiz": "لا يمكن للمشرفين إضافة امتحانات إلى المكتبة",
        "Library.invalid_or_expired_token": "رابط المشاركة غير صالح أو منتهي الصلاحية",
        "Library.quiz_not_found": "الامتحان غير موجود",
        "Library.quiz_already_in_library": "الامتحان موجود بالفعل في مكتبتك",
        "Library.quiz_added_successfully": "تمت إضافة الامتحان إلى مكتبتك",
        "Library.quiz_not_found_or_not_public": "الامتحان غير موجود أو ليس عامًا",
        "Library.public_quiz_added_successfully": "تمت إضافة الامتحان العام إلى مكتبتك",
        "Library.quiz_retrieved_successfully": "تم جلب الامتحان بنجاح",

        "Question.quiz_id_required": "معرف الامتحان مطلوب",
        "Question.question_id_required": "معرف السؤال مطلوب",
        "Question.quiz_not_found": "الامتحان غير موجود",
        "Question.no_questions_found": "لا توجد أسئلة لهذا الامتحان",
        "Question.questions_found": "تم جلب الأسئلة بنجاح",
        "Question.required_fields_missing": "معرف الامتحان والسؤال والخيارات والخيار الصحيح مطلوبة",
        "Question.invalid_options": "يجب أن يكون هناك خياران على الأقل",
        "Question.invalid_correct_option": "الخيار الصحيح يجب أن يكون ضمن النطاق الصحيح",
        "Question.not_authorized_to_add": "غير مصرح لك بإضافة أسئلة إلى هذا الامتحان",
        "Question.question_added_successfully": "تمت إضافة السؤال بنجاح",
        "Question.not_authorized_to_delete": "غير مصرح لك بحذف هذا السؤال",
        "Question.question_not_found_in_quiz": "السؤال غير موجود في هذا الامتحان",
        "Question.question_deleted_successfully": "تم حذف السؤال بنجاح",
        "Question.question_not_found": "السؤال غير موجود",
        "Question.not_authorized_to_update": "غير مصرح لك بتعديل هذا السؤال",
        "Question.not_authorized_to_access": "غير مصرح لك بالوصول إلى هذا السؤال",
        "Question.question_updated_successfully": "تم تحديث السؤال بنجاح",
        "Question.question_found": "تم جلب السؤال بنجاح",

        "Score.quiz_id_required": "معرف الامتحان مطلوب",
        "Score.invalid_answers": "يجب أن تكون الإجابات قائمة بأرقام الخيارات",
        "Score.user_not_found": "المستخدم غير موجود",
        "Score.user_only_submission": "يمكن للمستخدمين فقط تقديم الامتحانات",
        "Score.quiz_not_in_library": "هذا الامتحان غير موجود في مكتبتك",
        "Score.already_submitted": "لقد قمت بتقديم هذا الامتحان بالفعل",
        "Score.quiz_not_found": "الامتحان غير موجود",
        "Score.quiz_has_no_questions": "لا يحتوي هذا الامتحان على أسئلة",
        "Score.quiz_submitted_successfully": "تم تقديم الامتحان بنجاح",
        "Score.score_id_required": "معرف النتيجة مطلوب",
        "Score.score_not_found": "النتيجة غير موجودة",
        "Score.score_retrieved_successfully": "تم جلب النتيجة بنجاح",
        "Score.no_scores_found": "لا توجد نتائج",
        "Score.scores_retrieved_successfully": "تم جلب النتائج بنجاح",
        "Score.only_quiz_owner_can_delete": "يمكن لمالك الامتحان فقط حذف هذه النتيجة",
        "Score.score_deleted_successfully": "تم حذف النتيجة بنجاح",
        "Score.no_owned_quizzes_found": "لا تملك أي امتحانات",
        "Score.no_scores_found_for_owned_quizzes": "لا توجد نتائج لامتحاناتك",
    },
}

VISIBILITY_LABELS = {
    "en": {"public": "public", "private": "private"},
    "ar": {"public": "عام", "private": "خاص"},
}


def negotiate_locale() -> str:
    """Pick the best supported locale for the current request."""
    if has_request_context():
        best = request.accept_languages.best_match(config.SUPPORTED_LOCALES)
        if best:
            return best
    return config.DEFAULT_LOCALE if config.DEFAULT_LOCALE in MESSAGES else "en"


def t(key: str, locale: Optional[str] = None, **kwargs) -> str:
    """Translate a message key. Unknown keys fall back to English, then to the key itself."""
    locale = locale or negotiate_locale()
    message = MESSAGES.get(locale, {}).get(key) or MESSAGES["en"].get(key, key)
    if kwargs:
        message = message.format(**kwargs)
    return message
