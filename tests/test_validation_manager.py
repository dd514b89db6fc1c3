import unittest

from validation_manager import FLASH_KEY, pop_flash, push_flash


class FlashMessageTests(unittest.TestCase):

    def test_messages_survive_until_popped(self):
        state = {}
        push_flash(state, "✅ Horas actualizadas para 1 / Ana")
        push_flash(state, "✅ Horas actualizadas para 2 / Luis")

        self.assertEqual(
            pop_flash(state),
            ["✅ Horas actualizadas para 1 / Ana", "✅ Horas actualizadas para 2 / Luis"],
        )
        self.assertNotIn(FLASH_KEY, state)

    def test_pop_without_messages(self):
        self.assertEqual(pop_flash({}), [])
