from heroes.constants import ExperienceConstants

class ExperienceCurve:
    """Handles experience-to-level thresholds for character progression"""

    @staticmethod
    def required_experience(level: int) -> int:
        """
        Calculate the cumulative experience needed to reach a level

        Each level costs a flat 1000 plus 100 for every level already gained,
        so level 2 needs 1000, level 3 needs 2100, level 4 needs 3300.

        Args:
            level: Target level (levels at or below 1 need nothing)

        Returns:
            Total experience required to reach the level
        """
        if level <= 1:
            return 0

        flat_cost = ExperienceConstants.BASE_LEVEL_COST * (level - 1)
        growth_cost = ExperienceConstants.LEVEL_COST_INCREMENT * (level - 2) * (level - 1) // 2
        return flat_cost + growth_cost

    @staticmethod
    def experience_to_next(level: int) -> int:
        """
        Calculate the experience gap between a level and the next one

        Args:
            level: Current level

        Returns:
            Experience needed to go from `level` to `level + 1` (always positive)
        """
        return (ExperienceCurve.required_experience(level + 1)
                - ExperienceCurve.required_experience(level))

    @staticmethod
    def level_for_experience(experience: int) -> int:
        """
        Find the highest level whose threshold has been reached

        Args:
            experience: Total accumulated experience

        Returns:
            Level reached with this much experience (at least 1)
        """
        level = 1
        while ExperienceCurve.required_experience(level + 1) <= experience:
            level += 1
        return level
