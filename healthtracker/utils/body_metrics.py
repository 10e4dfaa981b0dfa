# utils/body_metrics.py
"""BMI 계산과 프로필 분석 (목표 체중, 플랜 유형, 권장 기간)."""

from typing import Dict, Any

MIN_NORMAL_BMI = 18.5
MAX_NORMAL_BMI = 24.9


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def bmi_category(bmi: float) -> str:
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def bmi_summary(weight_kg: float | None, height_cm: float | None) -> Dict[str, Any] | None:
    if not weight_kg or not height_cm:
        return None
    bmi = round(calculate_bmi(weight_kg, height_cm), 1)
    # 카테고리는 표시되는 소수점 한 자리 값 기준
    return {"bmi": bmi, "category": bmi_category(bmi)}


def ideal_weight_range(height_cm: float) -> Dict[str, float]:
    height_m = height_cm / 100
    return {
        "min": MIN_NORMAL_BMI * height_m * height_m,
        "max": MAX_NORMAL_BMI * height_m * height_m,
    }


def analyze_profile(weight: float, height: float, fitness_goal: str | None) -> Dict[str, Any]:
    current_bmi = calculate_bmi(weight, height)
    ideal = ideal_weight_range(height)

    if current_bmi < 18.5:
        target_weight = ideal["min"] + 2
        weight_goal, plan_type = "gain", "weight_gain"
    elif current_bmi > 25:
        target_weight = ideal["max"] - 2
        weight_goal, plan_type = "lose", "weight_loss"
    elif fitness_goal == "Muscle Building":
        target_weight = weight + 5
        weight_goal, plan_type = "gain", "muscle_building"
    elif fitness_goal == "Fat Burning":
        target_weight = max(ideal["min"], weight - 3)
        weight_goal, plan_type = "lose", "weight_loss"
    else:
        target_weight = weight
        weight_goal, plan_type = "maintain", "maintenance"

    weight_difference = abs(target_weight - weight)

    if current_bmi < 16 or current_bmi > 35:
        urgency, duration = "high", 12
    elif weight_difference > 15 or current_bmi < 18.5 or current_bmi > 30:
        urgency, duration = "moderate", 6
    else:
        urgency, duration = "low", 3

    return {
        "current_bmi": round(current_bmi, 1),
        "target_bmi": round(calculate_bmi(target_weight, height), 1),
        "target_weight": round(target_weight, 1),
        "ideal_weight_min": round(ideal["min"], 1),
        "ideal_weight_max": round(ideal["max"], 1),
        "weight_goal": weight_goal,
        "weight_difference": round(weight_difference, 1),
        "urgency": urgency,
        "recommended_duration": duration,
        "plan_type": plan_type,
    }


MONTHLY_PREDICTIONS = {
    1: {
        "weight_loss": "You should see initial water weight loss (2-3 kg) and improved energy levels. Focus on building consistent habits.",
        "weight_gain": "Expect gradual muscle gain (1-2 kg) with proper nutrition. Initial strength improvements will be noticeable.",
        "muscle_building": "Foundation building phase. Expect improved form and technique with modest strength gains.",
        "maintenance": "Focus on establishing routine. Energy levels and mood should improve significantly.",
    },
    2: {
        "weight_loss": "Steady fat loss continues (1-2 kg). Clothes should fit better. Cardiovascular endurance improves.",
        "weight_gain": "Continued muscle development. Strength gains become more apparent. Appetite should normalize.",
        "muscle_building": "Noticeable muscle definition. Strength increases become consistent. Recovery improves.",
        "maintenance": "Routine is established. Overall fitness and stamina show marked improvement.",
    },
    3: {
        "weight_loss": "Significant progress visible. Target weight closer. Metabolic improvements stabilize.",
        "weight_gain": "Healthy weight gain achieved. Muscle mass increased significantly. Strength peaked.",
        "muscle_building": "Major muscle gains. Body composition dramatically improved. Peak performance.",
        "maintenance": "Optimal fitness level maintained. Long-term healthy habits established.",
    },
}


def initial_prediction(month: int, plan_type: str) -> str:
    predictions = MONTHLY_PREDICTIONS[min(month, 3)]
    return predictions.get(plan_type, "Continue following your personalized plan for optimal results.")


def compliance_prediction(month: int, total_months: int, diet_compliance: float,
                          workout_compliance: float, plan_type: str, weight_goal: str) -> str:
    if diet_compliance >= 80 and workout_compliance >= 80:
        prediction = f"Excellent progress! You're on track to {weight_goal} your target weight. "
    elif diet_compliance >= 60 and workout_compliance >= 60:
        prediction = "Good progress with room for improvement. Consider increasing your commitment to see better results. "
    else:
        prediction = "Progress is slower than expected. Let's adjust your plan to make it more achievable. "

    if month < total_months:
        prediction += initial_prediction(month + 1, plan_type)
    else:
        prediction += "You're approaching the end of your plan. Consider creating a new plan for continued progress."
    return prediction
