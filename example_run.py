from ui.config import AppConfig
from ui.form_controller import FormController
from ui.logging import configure_logging

config = AppConfig.from_env()
configure_logging(config.log_level_value)

controller = FormController(config)
controller.update_fields(
    url="https://example.com",
    name="Example User",
    email="user@example.com",
    strategy="mobile",
)

state = controller.submit()
print(state)
if state.result is not None:
    print("\n".join(state.result.display_lines()))
