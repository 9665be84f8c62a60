from src.service.dining.driven_adapter.model.reservation_model import ReservationModel
from src.service.dining.driven_adapter.model.restaurant_model import RestaurantModel
from src.service.dining.driven_adapter.model.user_model import UserModel


__all__ = ['ReservationModel', 'RestaurantModel', 'UserModel']
