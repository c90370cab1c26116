from src.common.constants import DeliveryState


class DeliveryStateMachine:
    """
    Номинальный граф переходов доставки.
    Сервис его не навязывает: переход вне графа только логируется.
    """
    ALLOWED_TRANSITIONS = {
        DeliveryState.CREATED: [DeliveryState.IN_PROGRESS, DeliveryState.FAILED],
        DeliveryState.IN_PROGRESS: [DeliveryState.DELIVERED, DeliveryState.FAILED],
        DeliveryState.DELIVERED: [],
        DeliveryState.FAILED: [],
    }

    TERMINAL_STATES = frozenset({DeliveryState.DELIVERED, DeliveryState.FAILED})

    @staticmethod
    def is_nominal(current_state: str, new_state: str) -> bool:
        try:
            curr = DeliveryState(current_state)
            new = DeliveryState(new_state)
            return new in DeliveryStateMachine.ALLOWED_TRANSITIONS.get(curr, [])
        except ValueError:
            return False

    @staticmethod
    def is_terminal(state: str) -> bool:
        try:
            return DeliveryState(state) in DeliveryStateMachine.TERMINAL_STATES
        except ValueError:
            return False
