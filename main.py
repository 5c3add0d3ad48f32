import asyncio

from config.logging_setup import configure_logging
from config.settings import ServiceConfig
from registration.controller import FormController
from registration.gateway import SubmissionGateway
from registration.state import REQUIRED_FIELDS, SubmissionStatus

LABELS = {
    "name": "Full name",
    "email": "Email",
    "phone": "Mobile number",
    "organization": "Organization",
    "country": "Country",
    "city": "City",
}


def prompt_fields(controller: FormController, only=None):
    for field in only or REQUIRED_FIELDS:
        current = controller.state.fields[field]
        hint = f" [{current}]" if current else ""
        value = input(f"{LABELS[field]}{hint}: ")
        if value or not current:
            controller.update_field(field, value)


async def run():
    configure_logging()

    # load service config
    config = ServiceConfig.from_env()
    gateway = SubmissionGateway(config)

    navigated = asyncio.Event()

    def on_navigate(page: str):
        print(f"\n-> {page}")
        navigated.set()

    controller = FormController(gateway, on_navigate)
    try:
        prompt_fields(controller)
        while True:
            await controller.submit()
            print(f"\n[{controller.status.value}] {controller.state.message}")

            if controller.status is SubmissionStatus.SUCCEEDED:
                await navigated.wait()
                return

            again = input("Try again? [y/N]: ").strip().lower()
            if again != "y":
                return
            prompt_fields(controller, only=controller.missing_fields or None)
    finally:
        controller.close()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
