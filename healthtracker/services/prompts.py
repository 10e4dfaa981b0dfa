# services/prompts.py
import math

DIET_PHASE_TEXT = {
    "Foundation": "Focus on establishing healthy eating habits with gradual changes and easier-to-follow meal plans. Emphasis on consistency over complexity.",
    "Progression": "Increase nutritional optimization with more varied and challenging meal combinations. Fine-tune macronutrient ratios for better results.",
    "Advanced": "Maximum optimization for goal achievement with advanced meal timing and macro cycling strategies. Prepare for goal completion and maintenance.",
}

WORKOUT_PHASE_TEXT = {
    "Foundation": "Focus on form, technique, and habit building with moderate intensity. Sets: 2-3, Reps: 12-15, Rest: 60-90 seconds.",
    "Progression": "Increase intensity and complexity with progressive overload. Sets: 3-4, Reps: 8-12, Rest: 90-120 seconds.",
    "Advanced": "Peak performance and specialization with high intensity. Sets: 3-5, Reps: 6-10, Rest: 2-3 minutes.",
}


def program_phase(week: int, total_weeks: int) -> str:
    if week <= 4:
        return "Foundation"
    if week <= math.floor(total_weeks * 0.7):
        return "Progression"
    return "Advanced"


def _conditions(profile: dict) -> str:
    conditions = [c for c in (profile.get("health_conditions") or []) if c != "None"]
    return ", ".join(conditions) or "None"


def _personal_information(profile: dict) -> str:
    return f"""Personal Information:
- Age: {profile.get('age')} years old
- Gender: {profile.get('gender')}
- Height: {profile.get('height')} cm
- Weight: {profile.get('weight')} kg
- Fitness Goal: {profile.get('fitness_goal')}
- Health Conditions: {_conditions(profile)}"""


def initial_diet_prompt(profile: dict, total_weeks: int) -> str:
    return f"""Create a personalized 7-day diet plan for Week 1 of my {total_weeks}-week program:

{_personal_information(profile)}

Requirements:
1. Align calories and macronutrients with my {profile.get('fitness_goal')} goal
2. Avoid any foods that conflict with my health conditions
3. Use realistic portion sizes and easy-to-find ingredients
4. Keep the plan simple enough to follow consistently in the first week"""


def initial_workout_prompt(profile: dict, total_weeks: int) -> str:
    return f"""Create a personalized 6-day workout plan for Week 1 of my {total_weeks}-week program:

{_personal_information(profile)}

Requirements:
1. Align exercises, sets, reps and rest periods with my {profile.get('fitness_goal')} goal
2. Avoid any exercises that conflict with my health conditions
3. Include a warmup and cooldown for each day
4. Start at a moderate intensity suitable for building the habit"""


def progressive_diet_prompt(profile: dict, week: int, total_weeks: int) -> str:
    phase = program_phase(week, total_weeks)
    goal = profile.get("fitness_goal")
    return f"""Create a personalized 7-day diet plan for Week {week} of my {total_weeks}-week program:

{_personal_information(profile)}

Progressive Context: This is Week {week} ({phase} Phase): {DIET_PHASE_TEXT[phase]}

Week {week} Requirements:
1. Build upon previous weeks with NEW meal varieties and recipes
2. Adjust portion sizes and macros based on Week {week} progression needs
3. Align with {goal} goal with week-appropriate intensity
4. Provide fresh, engaging meal options that prevent dietary boredom
5. Include weekly macro targets appropriate for this phase

Please ensure meals are progressively optimized for Week {week} of the program and varied from previous weeks."""


def progressive_workout_prompt(profile: dict, week: int, total_weeks: int) -> str:
    phase = program_phase(week, total_weeks)
    goal = profile.get("fitness_goal")
    return f"""Create a personalized 6-day workout plan for Week {week} of my {total_weeks}-week program:

{_personal_information(profile)}

Progressive Context: This is Week {week} ({phase} Phase): {WORKOUT_PHASE_TEXT[phase]}

Week {week} Requirements:
1. Build upon previous weeks with PROGRESSIVE difficulty increase
2. Introduce NEW exercises and movement patterns
3. Adjust intensity, volume, and complexity for Week {week}
4. Align with {goal} goal with week-appropriate training variables
5. Provide variety to prevent training plateaus

Please ensure workouts are progressively more challenging than Week {week - 1} and include new exercises."""


def overall_rating(diet_compliance: float, workout_compliance: float) -> str:
    average = (diet_compliance + workout_compliance) / 2
    if average >= 90:
        return "excellent"
    if average >= 75:
        return "good"
    if average >= 60:
        return "fair"
    return "poor"


def recommendations_prompt(profile: dict, current_week: int, total_weeks: int,
                           diet_compliance: float, workout_compliance: float) -> str:
    return f"""As an AI health coach, analyze this user's fitness progress and provide personalized recommendations:

User Profile:
- Age: {profile.get('age')}
- Gender: {profile.get('gender')}
- Fitness Goal: {profile.get('fitness_goal')}
- Health Conditions: {_conditions(profile)}

Current Progress Analysis:
- Current Week: {current_week} of {total_weeks}
- Diet Compliance: {diet_compliance:.1f}%
- Workout Compliance: {workout_compliance:.1f}%
- Overall Performance: {overall_rating(diet_compliance, workout_compliance)}

Please provide 3-4 specific, actionable recommendations in JSON format:
{{
  "recommendations": [
    {{
      "type": "motivation|warning|suggestion|achievement",
      "title": "Short descriptive title",
      "message": "Detailed recommendation message",
      "priority": "high|medium|low"
    }}
  ]
}}

Focus on:
1. Celebrating achievements and progress
2. Addressing areas that need improvement
3. Providing specific, actionable advice
4. Motivating continued adherence to the plan
5. Adjusting expectations based on current week and total duration"""


def default_recommendations(current_week: int, diet_compliance: float, workout_compliance: float) -> list[dict]:
    """AI 추천이 실패했을 때 보여줄 기본 추천."""
    recommendations = []
    if diet_compliance < 70:
        recommendations.append({
            "type": "warning",
            "title": "Diet Plan Adherence",
            "message": "Your diet compliance is below target. Try meal prepping on weekends to stay consistent.",
            "priority": "high",
        })
    if workout_compliance > 80:
        recommendations.append({
            "type": "achievement",
            "title": "Excellent Workout Consistency!",
            "message": "You're doing great with your workouts! Keep up the momentum.",
            "priority": "medium",
        })
    if current_week < 4:
        recommendations.append({
            "type": "motivation",
            "title": "Building Healthy Habits",
            "message": "You're in the foundation phase. Focus on consistency over perfection.",
            "priority": "medium",
        })
    return recommendations
