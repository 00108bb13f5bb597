"""Finance Tracker GUI Application using NiceGUI."""

import logging

import plotly.graph_objects as go
from nicegui import events, ui

from finance_tracker.database import StorageError
from finance_tracker.forms import CategoryForm, TransactionForm
from finance_tracker.live import Subscriptions
from finance_tracker.models import Category, Transaction, TransactionSummary, TransactionType
from finance_tracker.services import FinanceState, category_breakdown

logger = logging.getLogger(__name__)

TYPE_LABELS = {
    TransactionType.EXPENSE.value: 'Expense',
    TransactionType.INCOME.value: 'Income',
}

PIE_COLORS = [
    '#E91E63', '#9C27B0', '#673AB7', '#3F51B5', '#2196F3', '#03A9F4',
    '#00BCD4', '#009688', '#4CAF50', '#8BC34A', '#CDDC39', '#FFEB3B',
]


class App:
    """Main application frontend using NiceGUI. One instance per connected page."""

    def __init__(self, state: FinanceState):
        """Build the page and bind it to the live state."""
        self.state = state
        self._views = Subscriptions()
        self._dialogs = Subscriptions()

        self._setup_styles()
        self._build_ui()

        client = ui.context.client
        client.on_connect(self._attach)
        client.on_disconnect(self._detach)

    def _setup_styles(self):
        """Setup custom styles and colors."""
        ui.colors(primary='#38bdf8', secondary='#0ea5e9', accent='#0369a1')
        ui.query('body').style('background-color: #0f172a; color: #f8fafc;')

    def _build_ui(self):
        """Construct the layout."""
        with ui.header().classes('items-center justify-between bg-slate-900 border-b border-slate-700'):
            ui.label('Finance Tracker').classes('text-2xl font-bold text-sky-400')
            with ui.row().classes('items-center gap-4'):
                ui.button('Add Category', on_click=self._open_add_category, icon='label').props('flat color=white')
                ui.button('Add Transaction', on_click=self._open_add_transaction, icon='add').props('flat color=white')

        with ui.tabs().classes('w-full bg-slate-900 text-slate-400') as tabs:
            self.transactions_tab = ui.tab('Transactions', icon='list')
            self.statistics_tab = ui.tab('Statistics', icon='insights')

        with ui.tab_panels(tabs, value=self.transactions_tab).classes('w-full grow bg-transparent'):
            with ui.tab_panel(self.transactions_tab):
                self._build_transactions_tab()
            with ui.tab_panel(self.statistics_tab):
                self._build_statistics_tab()

        with ui.page_sticky(position='bottom-right', x_offset=24, y_offset=24):
            ui.button(icon='add', on_click=self._open_add_transaction).props('fab color=accent')

    def _build_transactions_tab(self):
        """Build the transactions table section."""
        with ui.column().classes('w-full grow p-4'):
            ui.label('Transactions').classes('text-2xl font-bold mb-4')

            columns = [
                {'name': 'date', 'label': 'Date', 'field': 'date', 'sortable': True, 'align': 'left'},
                {'name': 'type', 'label': 'Type', 'field': 'type', 'sortable': True, 'align': 'left'},
                {'name': 'amount', 'label': 'Amount', 'field': 'amount', 'align': 'right'},
                {'name': 'category', 'label': 'Category', 'field': 'category', 'sortable': True, 'align': 'left'},
                {'name': 'description', 'label': 'Description', 'field': 'description', 'align': 'left'},
            ]

            self.table = ui.table(
                columns=columns, rows=[], row_key='id', pagination={'rowsPerPage': 0}
            ).props('virtual-scroll hide-bottom').classes('w-full').style('max-height: 70vh')

    def _build_statistics_tab(self):
        """Build the statistics dashboard."""
        with ui.column().classes('w-full grow p-4 gap-6'):
            ui.label('Statistics').classes('text-2xl font-bold')

            with ui.row().classes('w-full gap-4'):
                self.income_card = self._stat_card('Income', '0.00', 'green-400')
                self.expense_card = self._stat_card('Expense', '0.00', 'red-400')
                self.balance_card = self._stat_card('Balance', '0.00', 'blue-400')

            self.empty_label = ui.label('No expense data available.').classes('text-slate-400 self-center')

            with ui.row().classes('w-full gap-4') as self.breakdown_row:
                with ui.card().classes('grow p-4 bg-slate-800 border-slate-700'):
                    ui.label('Expenses by Category').classes('text-lg font-bold mb-4')
                    self.pie_chart = ui.plotly({}).classes('w-full h-80')

                with ui.card().classes('grow p-4 bg-slate-800 border-slate-700'):
                    ui.label('Breakdown').classes('text-lg font-bold mb-4')
                    columns = [
                        {'name': 'category', 'label': 'Category', 'field': 'category', 'align': 'left'},
                        {'name': 'amount', 'label': 'Amount', 'field': 'amount', 'align': 'right'},
                        {'name': 'percentage', 'label': 'Percentage', 'field': 'percentage', 'align': 'right'},
                    ]
                    self.breakdown_table = ui.table(
                        columns=columns, rows=[], row_key='category', pagination={'rowsPerPage': 0}
                    ).props('flat hide-bottom').classes('w-full')

    def _stat_card(self, title: str, value: str, color: str):
        with ui.card().classes('grow p-6 bg-slate-800 border border-slate-700 items-center justify-center') as card:
            ui.label(title).classes('text-slate-400 uppercase text-xs tracking-wider')
            card.value_label = ui.label(value).classes(f'text-3xl font-bold text-{color}')
        return card

    # Live bindings
    def _attach(self):
        """Subscribe the views to the live state (also on reconnect)."""
        if self._views:
            return
        self._views.add(self.state.transactions.subscribe(self._render_transactions))
        self._views.add(self.state.summary.subscribe(self._render_summary))

    def _detach(self):
        """Release view and open-dialog subscriptions of a closed page."""
        self._views.close()
        self._dialogs.close()

    def _render_transactions(self, transactions: list[Transaction]):
        """Update the transactions table."""
        self.table.rows = [
            {
                'id': t.id,
                'date': t.date.strftime('%Y-%m-%d'),
                'type': TYPE_LABELS[t.type.value],
                'amount': f'{t.amount:.2f}',
                'category': t.category,
                'description': t.description,
            }
            for t in transactions
        ]
        self.table.update()
        logger.debug('Rendered %d transactions', len(transactions))

    def _render_summary(self, summary: TransactionSummary):
        """Update cards, pie chart and breakdown table."""
        self.income_card.value_label.set_text(f'{summary.total_income:.2f}')
        self.expense_card.value_label.set_text(f'{summary.total_expense:.2f}')
        self.balance_card.value_label.set_text(f'{summary.balance:.2f}')

        rows = category_breakdown(summary.expense_by_category)
        self.empty_label.set_visibility(not rows)
        self.breakdown_row.set_visibility(bool(rows))
        if not rows:
            return

        fig = go.Figure(data=[go.Pie(
            labels=[r['category'] for r in rows],
            values=[float(r['amount']) for r in rows],
            hole=.4,
            sort=False,
            marker=dict(colors=[PIE_COLORS[i % len(PIE_COLORS)] for i in range(len(rows))]),
        )])
        fig.update_layout(
            margin=dict(t=0, b=0, l=0, r=0),
            paper_bgcolor='rgba(0,0,0,0)',
            plot_bgcolor='rgba(0,0,0,0)',
            font=dict(color='#f8fafc'),
            showlegend=True
        )
        self.pie_chart.update_figure(fig)

        self.breakdown_table.rows = [
            {
                'category': r['category'],
                'amount': f"{r['amount']:.2f}",
                'percentage': f"{r['percentage']:.1f}%",
            }
            for r in rows
        ]
        self.breakdown_table.update()

    # Dialogs
    def _open_add_transaction(self):
        """Open the modal add-transaction form."""
        form = TransactionForm()
        subscriptions = Subscriptions()

        with ui.dialog() as dialog, ui.card().classes('w-96'):
            ui.label('Add Transaction').classes('text-xl font-bold mb-2')

            type_toggle = ui.toggle(TYPE_LABELS, value=form.type.value).classes('w-full')
            amount_input = ui.input('Amount').props('inputmode=decimal').classes('w-full')
            category_select = ui.select([], label='Category').classes('w-full')
            description_input = ui.input('Description').classes('w-full')

            with ui.input('Date', value=form.date_text).classes('w-full') as date_input:
                with ui.menu().props('no-parent-event') as menu:
                    with ui.date().bind_value(date_input):
                        with ui.row().classes('justify-end'):
                            ui.button('Close', on_click=menu.close).props('flat')
                with date_input.add_slot('append'):
                    ui.icon('edit_calendar').on('click', menu.open).classes('cursor-pointer')

            with ui.row().classes('w-full justify-end mt-4'):
                ui.button('Cancel', on_click=dialog.close).props('flat')
                save_button = ui.button('Save')

        def sync_save():
            save_button.set_enabled(form.can_submit)

        def sync_categories():
            category_select.set_options(form.categories, value=form.category or None)
            sync_save()

        def on_categories(type: TransactionType):
            def handler(categories: list[Category]):
                if form.type == type:
                    form.set_categories(categories)
                    sync_categories()
            return handler

        def on_type(e: events.ValueChangeEventArguments):
            if not e.value:
                return
            type = TransactionType(e.value)
            form.select_type(type, self.state.categories(type).value)
            sync_categories()

        def on_amount(e: events.ValueChangeEventArguments):
            form.amount_text = e.value or ''
            sync_save()

        def on_category(e: events.ValueChangeEventArguments):
            form.category = e.value or ''
            sync_save()

        def on_description(e: events.ValueChangeEventArguments):
            form.description = e.value or ''

        def on_date(e: events.ValueChangeEventArguments):
            form.set_date(e.value)

        def save():
            if not form.can_submit:
                return
            try:
                self.state.insert_transaction(form.to_transaction())
            except StorageError as ex:
                ui.notify(f'Could not save transaction: {ex}', type='negative')
                return
            dialog.close()
            ui.notify('Transaction added', type='positive')

        def close_subscriptions():
            subscriptions.close()
            self._dialogs.discard(subscriptions.close)

        type_toggle.on_value_change(on_type)
        amount_input.on_value_change(on_amount)
        category_select.on_value_change(on_category)
        description_input.on_value_change(on_description)
        date_input.on_value_change(on_date)
        save_button.on_click(save)
        dialog.on('hide', close_subscriptions)

        for txn_type in TransactionType:
            subscriptions.add(self.state.categories(txn_type).subscribe(on_categories(txn_type)))
        self._dialogs.add(subscriptions.close)
        sync_save()
        dialog.open()

    def _open_add_category(self):
        """Open the modal add-category form."""
        form = CategoryForm()

        with ui.dialog() as dialog, ui.card().classes('w-96'):
            ui.label('Add Category').classes('text-xl font-bold mb-2')
            type_toggle = ui.toggle(TYPE_LABELS, value=form.type.value).classes('w-full')
            name_input = ui.input('Name').classes('w-full')

            with ui.row().classes('w-full justify-end mt-4'):
                ui.button('Cancel', on_click=dialog.close).props('flat')
                save_button = ui.button('Save')

        def on_type(e: events.ValueChangeEventArguments):
            if e.value:
                form.type = TransactionType(e.value)

        def on_name(e: events.ValueChangeEventArguments):
            form.name = e.value or ''
            save_button.set_enabled(form.can_submit)

        def save():
            if not form.can_submit:
                return
            try:
                self.state.insert_category(form.to_category())
            except StorageError as ex:
                ui.notify(f'Could not save category: {ex}', type='negative')
                return
            dialog.close()
            ui.notify(f'Category "{form.name.strip()}" added', type='positive')

        type_toggle.on_value_change(on_type)
        name_input.on_value_change(on_name)
        save_button.on_click(save)
        save_button.set_enabled(False)
        dialog.open()
