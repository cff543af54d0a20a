"""Configuration errors raised while building transition models."""


class TransitionModelConfigurationError(ValueError):
    """Base class for invalid transition model configuration."""


class InvalidNumberOfJointSigmasError(TransitionModelConfigurationError):
    """Number of joint sigmas differs from the number of joints."""

    def __init__(self, sigma_count, joint_count):
        self.sigma_count = sigma_count
        self.joint_count = joint_count
        super().__init__(
            f"Got {sigma_count} joint sigmas for {joint_count} joints"
        )


class JointIndexOutOfBoundsError(TransitionModelConfigurationError, IndexError):
    """Requested joint index outside [0, joint_count)."""

    def __init__(self, joint_index, joint_count):
        self.joint_index = joint_index
        self.joint_count = joint_count
        super().__init__(
            f"Joint index {joint_index} out of bounds for {joint_count} joints"
        )


class InvalidJointSigmaError(TransitionModelConfigurationError):
    """Joint sigma is negative or not finite."""

    def __init__(self, joint_index, sigma):
        self.joint_index = joint_index
        self.sigma = sigma
        super().__init__(
            f"Joint sigma {sigma} for joint {joint_index} must be finite and non-negative"
        )
