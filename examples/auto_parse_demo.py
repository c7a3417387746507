from declarg import run, spec_from_func
from declarg.utils import setup_logging
from declarg.validators import one_of

setup_logging()


def deploy(
    service: str,
    *hosts: str,
    region: str = "us-east-1",
    replicas: int = 1,
    verbose: bool = False,
) -> str:
    """Deploy a service to a region."""
    if verbose:
        print(f"Deploying {service} to {region} ({replicas} replicas)...")
    return f"{service} deployed to {region} on {', '.join(hosts) or 'all hosts'}"


spec = spec_from_func(
    deploy,
    arg_metadata={
        "service": "Service name",
        "hosts": "Hosts to deploy to",
        "region": {
            "help": "Deployment region",
            "short": "r",
            "validators": [one_of(["us-east-1", "us-west-2"])],
        },
        "verbose": {"help": "Enable verbose mode", "short": "v"},
    },
)

if __name__ == "__main__":
    result = run(spec)
    print(deploy(result.pop("service"), *result.pop("hosts"), **result))
