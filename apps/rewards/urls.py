from django.urls import path, include
from rest_framework.routers import SimpleRouter

from . import views

router = SimpleRouter(trailing_slash=False)
router.register(r'rewards/rules', views.RewardRuleViewSet, basename='reward-rule')

urlpatterns = [
    path('rewards', views.get_reward_summary, name='reward-summary'),
    path('rewards/summary', views.get_reward_summary, name='reward-summary-alias'),
    path('rewards/transactions', views.get_reward_transactions, name='reward-transactions'),
    path('rewards/redeem', views.redeem_points, name='reward-redeem'),
    path('rewards/review', views.award_review_points, name='reward-review'),
    path('rewards/referral-code', views.get_referral_code, name='reward-referral-code'),
    path('rewards/referral', views.apply_referral, name='reward-referral'),
    path('rewards/admin/add', views.admin_add_points, name='reward-admin-add'),
    path('rewards/statistics', views.reward_statistics, name='reward-statistics'),
    path('', include(router.urls)),
]
