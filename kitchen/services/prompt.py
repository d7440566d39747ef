from __future__ import annotations

from kitchen.app.domain.models import ANY_TYPE, FilterInput

DIETARY_DELIMITER = ", "


def build_prompt(form: FilterInput) -> str:
    """Turn the form selections into the Arabic instruction sent to the model."""
    lines = [
        "قم بإنشاء وصفة طعام مفصلة باللغة العربية بناءً على المعلومات التالية. يرجى تقديم وصفة واحدة فقط.",
        "",
        f'المكونات المتاحة: "{form.ingredients}". يمكنك تضمين مكونات أساسية أخرى شائعة إذا لزم الأمر.',
    ]

    if form.cuisine != ANY_TYPE:
        lines.append(f'المطبخ المفضل: "يجب أن تكون الوصفة من المطبخ {form.cuisine}."')
    else:
        lines.append('المطبخ المفضل: "يمكن أن يكون المطبخ من أي نوع."')

    if form.mealType != ANY_TYPE:
        lines.append(f'نوع الوجبة المطلوب: "يجب أن تكون الوصفة من نوع: {form.mealType}."')
    else:
        lines.append('نوع الوجبة المطلوب: "يمكن أن تكون الوجبة من أي نوع."')

    if form.dietaryOptions:
        options = DIETARY_DELIMITER.join(form.dietaryOptions)
        lines.append(f'الاحتياجات الغذائية: "يجب أن تكون مناسبة للأنظمة الغذائية التالية: {options}."')
    else:
        lines.append('الاحتياجات الغذائية: "لا توجد قيود غذائية."')

    return "\n".join(lines) + "\n"
