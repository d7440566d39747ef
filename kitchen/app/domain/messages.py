# User-facing strings. The whole interface is in Arabic.

GENERATION_FAILED_MESSAGE = "حدث خطأ أثناء إنشاء الوصفة. يرجى المحاولة مرة أخرى."
GENERATION_FAILED_ERROR = "فشل إنشاء الوصفة."
UNKNOWN_ERROR_MESSAGE = "حدث خطأ غير معروف."
MISSING_API_KEY_MESSAGE = "لم يتم تكوين مفتاح الواجهة البرمجية على الخادم."
RATE_LIMITED_MESSAGE = "تم تجاوز حد الطلبات لخدمة الذكاء الاصطناعي. حاول مرة أخرى بعد قليل."
EMPTY_INGREDIENTS_MESSAGE = "يرجى إدخال المكونات المتوفرة لديك أولاً."
BUSY_MESSAGE = "جاري إنشاء الوصفة..."

LOGIN_FAILED_MESSAGE = "اسم المستخدم أو كلمة المرور غير صحيحة."
ADMIN_REQUIRED_MESSAGE = "يجب تسجيل الدخول كأدمن أولاً."
SETTINGS_SAVED_MESSAGE = "تم حفظ الإعدادات بنجاح."
REMOTE_SYNC_FAILED_MESSAGE = "تم حفظ الإعدادات محلياً، لكن فشلت المزامنة مع الإعدادات البعيدة."

SUBSCRIPTION_TITLE = "مرحباً بك في مطبخ سام!"
