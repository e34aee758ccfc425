"""Time-boxed challenges and their progress."""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from hunger_tracker.domain.challenges import (
    ChallengeDefinition,
    ChallengeGoal,
    ChallengeProgress,
    ChallengeType,
    ChallengeWithProgress,
    Difficulty,
    ProgressRule,
    RuleKind,
    UserChallengeStats,
)
from hunger_tracker.domain.meals import HOME_COOKED, MealRecord
from hunger_tracker.domain.progress import NutritionTargets
from hunger_tracker.services.dates import (
    local_day,
    resolve_now,
    start_of_day,
    start_of_month,
    start_of_next_month,
    start_of_week,
)

CUISINE_TAGS = frozenset(
    {
        "Italian",
        "Mexican",
        "Asian",
        "Indian",
        "Mediterranean",
        "Japanese",
        "Thai",
        "Chinese",
        "French",
        "American",
    }
)

STREAK_WEEKS = 52
RECOMMENDED_MIN_PERCENT = 20
RECOMMENDED_MAX_PERCENT = 90
RECOMMENDED_LIMIT = 3
ON_FIRE_STREAK = 4

# (minimum completed challenges, badge), highest first
_COMPLETION_BADGES = (
    (50, "Century Club"),
    (25, "Challenge Master"),
    (10, "Go-Getter"),
)

ProgressStrategy = Callable[[ProgressRule, Sequence[MealRecord], datetime], int]


@dataclass(frozen=True)
class _Template:
    id: str
    title: str
    description: str
    emoji: str
    type: ChallengeType
    difficulty: Difficulty
    xp_reward: int
    goal: ChallengeGoal
    rule: ProgressRule
    tags: frozenset[str] = frozenset()


def _catalog(targets: NutritionTargets) -> list[_Template]:
    return [
        _Template(
            id="home-chef-week",
            title="Home Chef Week",
            description="Cook all your meals at home for 7 days straight",
            emoji="🏠",
            type="weekly",
            difficulty="medium",
            xp_reward=500,
            goal=ChallengeGoal(7, "days", "Days of home cooking"),
            rule=ProgressRule(
                RuleKind.DISTINCT_DAYS_WITH_TAG, tags=frozenset({HOME_COOKED})
            ),
            tags=frozenset({HOME_COOKED}),
        ),
        _Template(
            id="protein-power",
            title="Protein Power",
            description="Hit your protein goal every day this week",
            emoji="💪",
            type="weekly",
            difficulty="medium",
            xp_reward=400,
            goal=ChallengeGoal(7, "days", "Days hitting protein goal"),
            rule=ProgressRule(
                RuleKind.DISTINCT_DAYS_ABOVE_DAILY_THRESHOLD,
                nutrient="protein",
                threshold=targets.protein,
            ),
        ),
        _Template(
            id="budget-warrior",
            title="Budget Warrior",
            description="Stay under your daily budget for the whole week",
            emoji="💰",
            type="weekly",
            difficulty="hard",
            xp_reward=600,
            goal=ChallengeGoal(7, "days", "Days under budget"),
            rule=ProgressRule(
                RuleKind.DISTINCT_DAYS_WITHIN_DAILY_LIMIT,
                nutrient="cost",
                threshold=targets.budget,
            ),
        ),
        _Template(
            id="veggie-master",
            title="Veggie Master",
            description="Include vegetables in every meal today",
            emoji="🥗",
            type="daily",
            difficulty="easy",
            xp_reward=100,
            goal=ChallengeGoal(3, "meals", "Meals with vegetables"),
            rule=ProgressRule(
                RuleKind.COUNT_MATCHING_RECORDS,
                tags=frozenset({"Vegetarian", "Vegan"}),
            ),
            tags=frozenset({"Vegetarian", "Vegan"}),
        ),
        _Template(
            id="meal-prep-marathon",
            title="Meal Prep Marathon",
            description="Prepare and log at least 5 meals this month",
            emoji="📦",
            type="monthly",
            difficulty="easy",
            xp_reward=300,
            goal=ChallengeGoal(5, "meals", "Meal prep sessions"),
            rule=ProgressRule(
                RuleKind.COUNT_MATCHING_RECORDS, tags=frozenset({"Meal Prep"})
            ),
            tags=frozenset({"Meal Prep"}),
        ),
        _Template(
            id="breakfast-champion",
            title="Breakfast Champion",
            description="Never skip breakfast for 7 days",
            emoji="🍳",
            type="weekly",
            difficulty="easy",
            xp_reward=300,
            goal=ChallengeGoal(7, "days", "Days with breakfast logged"),
            rule=ProgressRule(
                RuleKind.DISTINCT_DAYS_WITH_TAG, tags=frozenset({"Breakfast"})
            ),
            tags=frozenset({"Breakfast"}),
        ),
        _Template(
            id="international-cuisine",
            title="Around the World",
            description="Try 5 different cuisines this month",
            emoji="🌍",
            type="monthly",
            difficulty="medium",
            xp_reward=500,
            goal=ChallengeGoal(5, "cuisines", "Different cuisines tried"),
            rule=ProgressRule(RuleKind.DISTINCT_TAG_VALUES, tags=CUISINE_TAGS),
        ),
        _Template(
            id="hydration-hero",
            title="Hydration Hero",
            description="Drink 8 glasses of water every day this week",
            emoji="💧",
            type="weekly",
            difficulty="easy",
            xp_reward=250,
            goal=ChallengeGoal(7, "days", "Days well hydrated"),
            rule=ProgressRule(RuleKind.UNTRACKED),
        ),
        _Template(
            id="leftover-zero",
            title="Zero Waste Week",
            description="Use up all leftovers, no food waste",
            emoji="♻️",
            type="weekly",
            difficulty="hard",
            xp_reward=550,
            goal=ChallengeGoal(7, "days", "Days with zero waste"),
            rule=ProgressRule(RuleKind.UNTRACKED),
            tags=frozenset({"Leftovers"}),
        ),
        _Template(
            id="fiber-focus",
            title="Fiber Focus",
            description=f"Get {targets.fiber:g}g+ of fiber every day this week",
            emoji="🌾",
            type="weekly",
            difficulty="medium",
            xp_reward=400,
            goal=ChallengeGoal(7, "days", "Days hitting fiber goal"),
            rule=ProgressRule(
                RuleKind.DISTINCT_DAYS_ABOVE_DAILY_THRESHOLD,
                nutrient="fiber",
                threshold=targets.fiber,
            ),
        ),
    ]


def challenge_window(
    challenge_type: ChallengeType, now: datetime
) -> tuple[datetime, datetime]:
    """Return the half-open window of a challenge type containing ``now``."""
    if challenge_type == "daily":
        start = start_of_day(now)
        return start, start + timedelta(days=1)
    if challenge_type == "monthly":
        return start_of_month(now), start_of_next_month(now)
    start = start_of_week(now)
    return start, start + timedelta(days=7)


def get_active_challenges(
    now: datetime | None = None, targets: NutritionTargets | None = None
) -> list[ChallengeDefinition]:
    """Generate the challenges running at ``now``."""
    current = resolve_now(now)
    challenges = []
    for template in _catalog(targets or NutritionTargets()):
        start, end = challenge_window(template.type, current)
        challenges.append(
            ChallengeDefinition(
                id=template.id,
                title=template.title,
                description=template.description,
                emoji=template.emoji,
                type=template.type,
                difficulty=template.difficulty,
                xp_reward=template.xp_reward,
                start=start,
                end=end,
                goal=template.goal,
                rule=template.rule,
                tags=template.tags,
            )
        )
    return challenges


def calculate_challenge_progress(
    challenge: ChallengeDefinition, records: Sequence[MealRecord]
) -> ChallengeProgress:
    """Measure progress using the challenge's counting rule."""
    in_window = [r for r in records if challenge.start <= r.time < challenge.end]
    strategy = PROGRESS_STRATEGIES[challenge.rule.kind]
    current = strategy(challenge.rule, in_window, challenge.start)
    target = challenge.goal.target
    return ChallengeProgress(
        challenge_id=challenge.id,
        current=current,
        target=target,
        percentage=min(100.0, current / target * 100) if target > 0 else 100.0,
        completed=current >= target,
    )


def get_challenges_with_progress(
    records: Sequence[MealRecord],
    now: datetime | None = None,
    targets: NutritionTargets | None = None,
) -> list[ChallengeWithProgress]:
    """Pair each active challenge with its progress."""
    return [
        ChallengeWithProgress(
            challenge=challenge,
            progress=calculate_challenge_progress(challenge, records),
        )
        for challenge in get_active_challenges(now, targets)
    ]


def get_user_challenge_stats(
    records: Sequence[MealRecord],
    completed_challenges: Iterable[str],
    total_xp: int | None = None,
    now: datetime | None = None,
    targets: NutritionTargets | None = None,
) -> UserChallengeStats:
    """Aggregate completions, weekly streaks and badges."""
    current = resolve_now(now)
    persisted = set(completed_challenges)
    active = get_challenges_with_progress(records, current, targets)

    newly_completed = [
        item
        for item in active
        if item.progress.completed and item.challenge.id not in persisted
    ]
    total_completed = len(persisted) + len(newly_completed)

    if total_xp is None:
        rewards = {item.challenge.id: item.challenge.xp_reward for item in active}
        total_xp = sum(rewards.get(challenge_id, 0) for challenge_id in persisted)

    current_streak, longest_streak = _weekly_completion_streaks(
        records, current, targets
    )

    achievements = [
        badge for minimum, badge in _COMPLETION_BADGES if total_completed >= minimum
    ]
    if current_streak >= ON_FIRE_STREAK:
        achievements.append("On Fire")
    if active and all(item.progress.completed for item in active):
        achievements.append("Perfect Week")

    return UserChallengeStats(
        total_completed=total_completed,
        current_streak=current_streak,
        longest_streak=longest_streak,
        total_xp_earned=total_xp,
        achievements=achievements,
    )


def get_recommended_challenges(
    records: Sequence[MealRecord],
    now: datetime | None = None,
    targets: NutritionTargets | None = None,
) -> list[ChallengeDefinition]:
    """Suggest unfinished challenges with meaningful but partial progress."""
    candidates = [
        item
        for item in get_challenges_with_progress(records, now, targets)
        if not item.progress.completed
        and RECOMMENDED_MIN_PERCENT
        < item.progress.percentage
        < RECOMMENDED_MAX_PERCENT
    ]
    candidates.sort(key=lambda item: item.progress.percentage, reverse=True)
    return [item.challenge for item in candidates[:RECOMMENDED_LIMIT]]


def _weekly_completion_streaks(
    records: Sequence[MealRecord],
    now: datetime,
    targets: NutritionTargets | None,
) -> tuple[int, int]:
    """Walk back week by week checking for any completed challenge."""
    current_streak = 0
    longest_streak = 0
    run = 0
    still_current = True
    for offset in range(STREAK_WEEKS):
        moment = now - timedelta(weeks=offset)
        week_start = start_of_week(moment)
        week_end = week_start + timedelta(days=7)
        completed = any(
            calculate_challenge_progress(challenge, records).completed
            for challenge in get_active_challenges(moment, targets)
            if week_start <= challenge.start < week_end
        )
        if completed:
            run += 1
            longest_streak = max(longest_streak, run)
            if still_current:
                current_streak = run
        else:
            run = 0
            still_current = False
    return current_streak, longest_streak


def _days_by_record(
    records: Sequence[MealRecord], window_start: datetime
) -> dict[date, list[MealRecord]]:
    days: dict[date, list[MealRecord]] = {}
    for record in records:
        days.setdefault(local_day(record.time, window_start.tzinfo), []).append(record)
    return days


def _daily_totals(
    rule: ProgressRule, records: Sequence[MealRecord], window_start: datetime
) -> dict[date, float]:
    nutrient = rule.nutrient or "calories"
    return {
        day: sum(getattr(record, nutrient) or 0.0 for record in day_records)
        for day, day_records in _days_by_record(records, window_start).items()
    }


def _distinct_days_with_tag(
    rule: ProgressRule, records: Sequence[MealRecord], window_start: datetime
) -> int:
    tagged = [record for record in records if record.tags & rule.tags]
    return len(_days_by_record(tagged, window_start))


def _distinct_days_above_threshold(
    rule: ProgressRule, records: Sequence[MealRecord], window_start: datetime
) -> int:
    totals = _daily_totals(rule, records, window_start)
    return sum(1 for total in totals.values() if total >= rule.threshold)


def _distinct_days_within_limit(
    rule: ProgressRule, records: Sequence[MealRecord], window_start: datetime
) -> int:
    totals = _daily_totals(rule, records, window_start)
    return sum(1 for total in totals.values() if total <= rule.threshold)


def _distinct_tag_values(
    rule: ProgressRule, records: Sequence[MealRecord], window_start: datetime
) -> int:
    seen: set[str] = set()
    for record in records:
        seen |= record.tags & rule.tags
    return len(seen)


def _count_matching_records(
    rule: ProgressRule, records: Sequence[MealRecord], window_start: datetime
) -> int:
    return sum(1 for record in records if record.tags & rule.tags)


def _untracked(
    rule: ProgressRule, records: Sequence[MealRecord], window_start: datetime
) -> int:
    return 0


PROGRESS_STRATEGIES: dict[RuleKind, ProgressStrategy] = {
    RuleKind.DISTINCT_DAYS_WITH_TAG: _distinct_days_with_tag,
    RuleKind.DISTINCT_DAYS_ABOVE_DAILY_THRESHOLD: _distinct_days_above_threshold,
    RuleKind.DISTINCT_DAYS_WITHIN_DAILY_LIMIT: _distinct_days_within_limit,
    RuleKind.DISTINCT_TAG_VALUES: _distinct_tag_values,
    RuleKind.COUNT_MATCHING_RECORDS: _count_matching_records,
    RuleKind.UNTRACKED: _untracked,
}
