from declarg import run
from declarg.parser import ArgType, CommandSpec
from declarg.utils import setup_logging
from declarg.validators import array_length, min_value, one_of, pattern, required

setup_logging()


def build_spec() -> CommandSpec:
    """Arguments of the `build` subcommand."""
    spec = CommandSpec(name="build", description="Build an image for a service.")
    spec.add_positional(
        "service",
        validators=[required(), one_of(["web", "database", "cache"])],
        description="Service name to build.",
    )
    spec.add_option(
        "tag",
        short="t",
        default="latest",
        validators=[pattern(r"^[\w.-]+$", "must be a valid image tag")],
        description="Image tag.",
    )
    spec.add_option("no-cache", ArgType.BOOLEAN, description="Ignore the build cache.")
    return spec


spec = CommandSpec(name="argument-examples", description="Declarg argument examples.")
spec.add_option("verbose", ArgType.BOOLEAN, short="v", description="Enable verbose output.")
spec.add_option(
    "region",
    short="r",
    default="us-east-1",
    validators=[one_of(["us-east-1", "us-west-2", "eu-central-1"])],
    description="Deployment region.",
)
spec.add_option(
    "replicas",
    ArgType.NUMBER,
    default=1,
    validators=[min_value(1)],
    description="Number of replicas.",
)
spec.add_option(
    "ports",
    ArgType.NUMBER_ARRAY,
    validators=[array_length(1, 4)],
    description="Ports to expose.",
)
spec.add_positional("targets", rest=True, description="Hosts to deploy to.")
spec.add_subcommand("build", build_spec, description="Build an image")


if __name__ == "__main__":
    result = run(spec)
    print(result)
