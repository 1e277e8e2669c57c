import json
import time

from sweetcli import Application, Subcommand


class PizzaSubcommand(Subcommand):
    command = "pizza"
    description = "Make a pizza"
    specs = {
        "a|add:+": {
            "desc": "Add some topping",
        },
        "t|type": {
            "desc": "Type of the pizza, defaults to italian",
            "default": "italian",
            "validValues": ["italian", "american"],
        },
        "n|number:": {
            "desc": "How many pizzas?",
            "type": "Number",
            "default": 1,
        },
    }

    def run(self):
        self.print_heading_line("Your pizza has:")
        self.println(json.dumps(dict(self.options), indent=4))

        self.println()
        if not self.print_timeout_message("Pizza ready for baking.", 1, 3, "c"):
            self.print_info_line("Baking cancelled.")
            return

        self.print_sub_heading_line("Baking…")

        for _ in range(100):
            self.print_spinner(False, "Preparing…")
            time.sleep(0.05)
        self.print_spinner(True, "Preparing…")

        total = 16
        for index in range(total):
            self.print_progress_bar(index + 1, total, str(index + 1), f"{total} seconds")
            time.sleep(1)

        self.print_success_line("Done")


if __name__ == '__main__':
    Application("Pizza Shop", "pizza-shop", app_path=__file__).add_subcommand(PizzaSubcommand).main()
