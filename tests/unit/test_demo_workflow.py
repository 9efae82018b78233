"""
Unit tests for the demo workflow script
"""

from unittest.mock import MagicMock, call

from trello_proxy import CreatedCard, RemoteAuthenticationError
from trello_proxy.markdown import render_created_card
from trello_proxy.scripts.demo_workflow import read_tour, write_tour


def created(card_id):
    card = {"id": card_id, "name": "Demo", "idList": "list1"}
    return CreatedCard(render_created_card(card), card_id, "list1")


class TestDemoWorkflow:
    def test_read_tour_prints_every_view(self, capsys):
        board = MagicMock()
        board.get_lists.return_value = "# Lists in Board\n"
        board.get_card_names.return_value = "# Card Names in Board\n"
        board.get_cards_in_list.return_value = "# Cards in ToDo\n"
        board.get_first_open_card.return_value = "# Card: First\n"

        read_tour(board, "ToDo")

        out = capsys.readouterr().out
        assert "# Lists in Board" in out
        assert "# Card: First" in out
        board.get_cards_in_list.assert_called_once_with("ToDo")

    def test_write_tour_chains_extracted_ids(self):
        board = MagicMock()
        board.create_card_in_list.side_effect = [created("new1"), created("new2")]

        write_tour(board, "ToDo", "Done")

        board.comment_card.assert_called_once_with(
            "new1", "This is a demo comment added via the API!"
        )
        board.mark_card_completed.assert_called_once_with("new1")
        assert board.move_card.call_args == call("new2", "Done")
        board.archive_card.assert_called_once_with("new2")

    def test_write_tour_skips_on_read_only_token(self, capsys):
        board = MagicMock()
        board.create_card_in_list.side_effect = RemoteAuthenticationError("forbidden")

        write_tour(board, "ToDo", "Done")

        assert capsys.readouterr().out.count("Note: skipped") == 2
        board.mark_card_completed.assert_not_called()
        board.move_card.assert_not_called()
