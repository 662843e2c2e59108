from __future__ import annotations

from django.urls import path

from .views import ClimateMonthlyView, ClimateParametersView

urlpatterns = [
    path(
        "climate/monthly/",
        ClimateMonthlyView.as_view(),
        name="climate-monthly",
    ),
    path(
        "climate/parameters/",
        ClimateParametersView.as_view(),
        name="climate-parameters",
    ),
]
